from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from salon_backend.scheduling.errors import InvalidInput, PastDateRejected, SchedulingError, SlotConflict
from salon_backend.scheduling.instants import format_instant

DATABASE_UNAVAILABLE_DETAIL = 'Database unavailable. Verify DATABASE_URL and database credentials.'


def database_unavailable(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=DATABASE_UNAVAILABLE_DETAIL,
    )


def scheduling_http_error(exc: SchedulingError) -> HTTPException:
    if isinstance(exc, (InvalidInput, PastDateRejected)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    if isinstance(exc, SlotConflict):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                'message': str(exc),
                'alternatives': [format_instant(alternative) for alternative in exc.alternatives],
            },
        )

    return database_unavailable(exc)


def get_tenant_record(db: Session, model, record_id: int, tenant_id: int, label: str):
    """Load a record by id, enforcing that it belongs to ``tenant_id``."""
    record = db.query(model).filter(model.id == record_id).first()

    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'{label} not found.',
        )

    if record.tenant_id != tenant_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f'This {label.lower()} belongs to another business.',
        )

    return record
