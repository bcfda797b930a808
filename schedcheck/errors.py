"""Errors raised by the conflict engine.

Detection and validation never raise; only the storage side does.
"""

from typing import Sequence


class ScheduleCheckError(Exception):
    """Base exception for schedcheck."""

    pass


class ConflictScanError(ScheduleCheckError):
    """The batched conflict-flag write of a scan failed.

    Nothing from the batch is durable. `schedule_ids` lists the records the
    batch attempted so the caller can retry or report them.
    """

    def __init__(self, message: str, schedule_ids: Sequence[int] = ()):
        super().__init__(message)
        self.schedule_ids = list(schedule_ids)

    @property
    def attempted(self) -> int:
        return len(self.schedule_ids)
