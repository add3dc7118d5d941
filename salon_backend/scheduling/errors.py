from datetime import datetime


class SchedulingError(Exception):
    """Base class for booking failures reported back to the caller."""


class InvalidInput(SchedulingError):
    pass


class PastDateRejected(SchedulingError):
    pass


class SlotConflict(SchedulingError):
    """The requested window overlaps an existing appointment.

    ``alternatives`` holds up to five free start instants, ascending. It may be
    empty when nothing was free inside the search window.
    """

    def __init__(self, message: str, alternatives: list[datetime] | None = None) -> None:
        super().__init__(message)
        self.alternatives = list(alternatives or [])


class StorageFailure(SchedulingError):
    """A storage error raised while checking or writing an appointment."""
