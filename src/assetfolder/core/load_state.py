"""Load-state tracking for one bulk folder load."""

from enum import Enum
from typing import Hashable, Optional

from assetfolder.utils.logger import get_logger

_logger = get_logger()


class LoadPhase(Enum):
    """Coarse state of a load cycle."""

    ENUMERATING = "enumerating"
    LOADING = "loading"
    READY = "ready"


class LoadState:
    """Reconciles folder enumeration with per-file completion events.

    ``expected_count`` is unknown until the scan has produced its full file
    list, while completion events may arrive earlier and in any order. The
    tracker counts early events but cannot become ready before the expected
    count is known. Once ready it stays ready; reloading uses a new tracker.
    """

    def __init__(self) -> None:
        self._expected: Optional[int] = None
        self._finished = 0
        self._failed = 0
        self._seen: set[Hashable] = set()

    @property
    def expected_count(self) -> Optional[int]:
        return self._expected

    @property
    def finished_count(self) -> int:
        return self._finished

    @property
    def failed_count(self) -> int:
        return self._failed

    @property
    def loaded_count(self) -> int:
        return self._finished - self._failed

    def mark_enumerated(self, count: int) -> None:
        """Record that the scan finished and found count eligible files.

        Raises:
            RuntimeError: If the expected count was already set
            ValueError: If count is negative or below the events already seen
        """
        if self._expected is not None:
            raise RuntimeError(f"Enumeration already completed ({self._expected} files)")
        if count < 0:
            raise ValueError(f"Expected count must not be negative: {count}")
        if count < self._finished:
            raise ValueError(
                f"Expected count {count} is below the {self._finished} loads already finished"
            )
        self._expected = count

    def record_finished(self, key: Optional[Hashable] = None, failed: bool = False) -> bool:
        """Record one terminal load outcome.

        Args:
            key: Identifies the request; a key seen before is ignored
            failed: Whether the load failed

        Returns:
            True if the event was counted
        """
        if key is not None:
            if key in self._seen:
                return False
            self._seen.add(key)

        if self._expected is not None and self._finished >= self._expected:
            _logger.warning(
                f"Ignoring completion beyond expected count {self._expected} (key: {key!r})"
            )
            return False

        self._finished += 1
        if failed:
            self._failed += 1
        return True

    @property
    def phase(self) -> LoadPhase:
        if self._expected is None:
            return LoadPhase.ENUMERATING
        if self._finished < self._expected:
            return LoadPhase.LOADING
        return LoadPhase.READY

    @property
    def is_enumerating(self) -> bool:
        return self._expected is None

    @property
    def is_loading(self) -> bool:
        return self._expected is not None and self._finished < self._expected

    @property
    def is_ready(self) -> bool:
        return self._expected is not None and self._finished >= self._expected

    def __repr__(self) -> str:
        return (
            f"LoadState(phase={self.phase.value}, expected={self._expected}, "
            f"finished={self._finished}, failed={self._failed})"
        )
