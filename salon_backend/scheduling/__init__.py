"""Appointment scheduling: overlap detection and alternative-slot search."""

from salon_backend.scheduling.errors import (
    InvalidInput,
    PastDateRejected,
    SchedulingError,
    SlotConflict,
    StorageFailure,
)
from salon_backend.scheduling.overlap import overlap_filter, overlaps
from salon_backend.scheduling.scheduler import check_and_create, find_alternatives, reschedule

__all__ = [
    'InvalidInput',
    'PastDateRejected',
    'SchedulingError',
    'SlotConflict',
    'StorageFailure',
    'check_and_create',
    'find_alternatives',
    'overlap_filter',
    'overlaps',
    'reschedule',
]
