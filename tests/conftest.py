"""Pytest fixtures for pollhooks tests."""

import os

import pytest

# Deterministic defaults, no real work-source service
os.environ["POLLHOOKS_INTERVAL_MS"] = "5000"
os.environ["POLLHOOKS_MAX_INTERVAL_MS"] = "60000"
os.environ["POLLHOOKS_BACKOFF_MULTIPLIER"] = "1.5"
os.environ["POLLHOOKS_SOURCE_URL"] = "http://work-source.test"
os.environ["POLLHOOKS_SOURCE_TOKEN"] = ""


@pytest.fixture
def calls():
    """Shared call log for ordering assertions."""
    return []


@pytest.fixture
def source(calls):
    """In-memory source that records claim/complete/ack calls."""
    from pollhooks.sources.memory import MemoryTaskSource

    class RecordingSource(MemoryTaskSource):
        async def claim(self, task_id):
            calls.append(("claim", task_id))
            return await super().claim(task_id)

        async def complete(self, task_id, result=None):
            calls.append(("complete", task_id))
            await super().complete(task_id, result)

        async def ack(self, target, message):
            calls.append(("ack", target))
            await super().ack(target, message)

    return RecordingSource()
