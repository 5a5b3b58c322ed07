"""Polling engine for pollhooks.

Each cycle:
1. Fetch pending tasks and messages from the work source
2. Triage tasks by priority
3. Claim and run tasks one at a time through the task hooks
4. Acknowledge every message back to its sender
5. Back off exponentially while there is nothing to do
"""

from .loop import Poller, create_poller

__all__ = ["Poller", "create_poller"]
