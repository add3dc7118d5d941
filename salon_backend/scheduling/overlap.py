"""
Overlap detection between appointments of the same tenant and employee.

Intervals are half-open, ``[start, start + duration)``: an appointment ending at
10:30 does not conflict with one starting at 10:30.
"""

from datetime import datetime, timedelta

from sqlalchemy import and_


def appointment_end(start: datetime, duration_minutes: int) -> datetime:
    return start + timedelta(minutes=duration_minutes)


def overlaps(
    existing_start: datetime,
    existing_duration_minutes: int,
    candidate_start: datetime,
    candidate_end: datetime,
) -> bool:
    """Return True when the existing appointment shares any instant with the candidate window."""
    existing_end = appointment_end(existing_start, existing_duration_minutes)
    return existing_start < candidate_end and existing_end > candidate_start


def overlap_filter(model, candidate_start: datetime, candidate_end: datetime):
    """SQL form of :func:`overlaps` against a mapped appointment class or alias."""
    return and_(
        model.start_time < candidate_end,
        model.end_time > candidate_start,
    )
