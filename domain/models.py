import os
import threading
from dataclasses import dataclass
from typing import Optional

from domain.constants import OUTCOME_COMPLETED, OUTCOME_CANCELLED, OUTCOME_FAILED
from domain.errors import InvalidInputError


@dataclass(frozen=True)
class CopyJob:
    source_path: str
    destination_dir: str
    repeat_count: int

    def __post_init__(self):
        if not isinstance(self.repeat_count, int) or self.repeat_count < 1:
            raise InvalidInputError(f"repeat_count must be a positive integer, got {self.repeat_count!r}")

    @property
    def target_path(self) -> str:
        return os.path.join(self.destination_dir, os.path.basename(self.source_path))


@dataclass(frozen=True)
class CopyProgress:
    cycle_index: int            # 1-based
    mean_elapsed_ms: float
    mean_throughput_label: str  # e.g. "1.50 MB/s"

    def display(self) -> str:
        return f"{self.mean_elapsed_ms:,.2f}ms at {self.mean_throughput_label}"


@dataclass(frozen=True)
class RunOutcome:
    status: str                 # COMPLETED / CANCELLED / FAILED
    cycles_completed: int
    reason: Optional[str] = None
    error: Optional[BaseException] = None
    phase: Optional[str] = None  # PREPARE / DELETE / COPY / CALLBACK, FAILED only

    @classmethod
    def completed(cls, cycles: int) -> "RunOutcome":
        return cls(OUTCOME_COMPLETED, cycles)

    @classmethod
    def cancelled(cls, cycles: int) -> "RunOutcome":
        return cls(OUTCOME_CANCELLED, cycles)

    @classmethod
    def failed(cls, cycles: int, error: BaseException, phase: str) -> "RunOutcome":
        return cls(OUTCOME_FAILED, cycles, reason=f"{type(error).__name__}: {error}", error=error, phase=phase)

    @property
    def is_completed(self) -> bool:
        return self.status == OUTCOME_COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status == OUTCOME_CANCELLED

    @property
    def is_failed(self) -> bool:
        return self.status == OUTCOME_FAILED


class CancellationHandle:
    """One-shot cancellation signal shared between a caller and one run.

    Signalling cannot be undone; construct a new handle for the next run.
    Calling the handle returns the flag, so it also works as a ``stop_flag``.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __call__(self) -> bool:
        return self._event.is_set()
