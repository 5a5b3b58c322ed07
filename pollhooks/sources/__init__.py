"""Work source implementations.

Concrete sources live in their own modules:
- memory: in-process source for tests and single-process workers
- http: REST work-source client
"""

from .base import TaskSource

__all__ = ["TaskSource"]
