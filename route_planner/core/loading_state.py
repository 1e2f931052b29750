"""LoadingState - Reference-counted busy flag.

Aggregates overlapping async operations (forward search, reverse lookup,
geolocation, route computation) into one boolean for the UI. Each operation
calls begin() when issued and end() when it settles, on success and failure
alike. The flag is busy while the count is above zero.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class LoadingState:
    """Counter of in-flight operations. The UI only reads is_busy."""

    def __init__(self) -> None:
        self._count = 0

    @property
    def count(self) -> int:
        """Number of operations issued but not yet settled."""
        return self._count

    @property
    def is_busy(self) -> bool:
        """True while at least one operation is in flight."""
        return self._count > 0

    def begin(self, operation: str) -> None:
        """Register an issued operation."""
        self._count += 1
        logger.debug(f"[LOADING] +{operation} (in flight: {self._count})")

    def end(self, operation: str) -> None:
        """Register a settled operation.

        Raises:
            RuntimeError: If called more often than begin()
        """
        if self._count == 0:
            raise RuntimeError(f"LoadingState.end('{operation}') called with no operation in flight")
        self._count -= 1
        logger.debug(f"[LOADING] -{operation} (in flight: {self._count})")

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        """Hold the busy flag for the duration of a block, released on exceptions too."""
        self.begin(operation)
        try:
            yield
        finally:
            self.end(operation)

    def __repr__(self) -> str:
        return f"LoadingState(count={self._count})"
