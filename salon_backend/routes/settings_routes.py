import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_backend.auth.dependencies import get_current_tenant_id
from salon_backend.database import get_db
from salon_backend.models.tenant import Tenant
from salon_backend.routes.common import database_unavailable

router = APIRouter(tags=['settings'])

logger = logging.getLogger(__name__)


class QrCodeRequest(BaseModel):
    qr: str

    @field_validator('qr')
    @classmethod
    def validate_qr(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('QR code is required.')
        return normalized


class QrCodeResponse(BaseModel):
    qr: str


@router.post('/qr')
def save_qr_code(
    data: QrCodeRequest,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        tenant = db.get(Tenant, tenant_id)
        if tenant is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Business not found.')

        tenant.qr_code = data.qr
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Failed to store QR code for tenant %s', tenant_id)
        raise database_unavailable(exc) from exc

    logger.info('Stored QR code for tenant %s', tenant_id)
    return {'message': 'QR code saved.'}


@router.get('/qr', response_model=QrCodeResponse)
def get_qr_code(
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        tenant = db.get(Tenant, tenant_id)
    except SQLAlchemyError as exc:
        logger.exception('Failed to load QR code for tenant %s', tenant_id)
        raise database_unavailable(exc) from exc

    if tenant is None or not tenant.qr_code:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='QR code not found.')

    return QrCodeResponse(qr=tenant.qr_code)
