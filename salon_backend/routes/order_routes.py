from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salon_backend.auth.dependencies import get_current_tenant_id
from salon_backend.database import get_db
from salon_backend.models.order import DELIVERY_TYPES, PAYMENT_METHODS, Order
from salon_backend.routes.appointment_routes import normalize_phone
from salon_backend.routes.common import database_unavailable
from salon_backend.scheduling.instants import to_utc_naive

router = APIRouter(tags=['orders'])


class CreateOrderRequest(BaseModel):
    client_name: str | None = None
    client_phone: str | None = None
    description: str | None = None
    delivery_type: str
    pickup_time: datetime | None = None
    address: str | None = None
    payment_method: str | None = None
    total: float = 0

    @field_validator('client_phone')
    @classmethod
    def validate_client_phone(cls, value: str | None) -> str | None:
        return normalize_phone(value)

    @field_validator('delivery_type')
    @classmethod
    def validate_delivery_type(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in DELIVERY_TYPES:
            raise ValueError('Invalid delivery type.')
        return normalized

    @field_validator('payment_method')
    @classmethod
    def validate_payment_method(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().upper() or None

    @field_validator('address')
    @classmethod
    def validate_address(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator('pickup_time')
    @classmethod
    def validate_pickup_time(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return to_utc_naive(value)

    @field_validator('total')
    @classmethod
    def validate_total(cls, value: float) -> float:
        if value < 0:
            raise ValueError('Total cannot be negative.')
        return value

    @model_validator(mode='after')
    def validate_delivery_details(self) -> 'CreateOrderRequest':
        if self.delivery_type == 'PICKUP' and self.pickup_time is None:
            raise ValueError('A pickup time is required for pickup orders.')

        if self.delivery_type == 'DELIVERY' and (
            not self.address or self.payment_method not in PAYMENT_METHODS
        ):
            raise ValueError('Delivery orders require an address and a valid payment method.')

        return self


class OrderResponse(BaseModel):
    id: int
    client_name: str | None = None
    client_phone: str | None = None
    description: str | None = None
    delivery_type: str
    pickup_time: datetime | None = None
    address: str | None = None
    payment_method: str | None = None
    total: float
    created_at: datetime

    class Config:
        from_attributes = True


@router.post('', response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    data: CreateOrderRequest,
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        order = Order(tenant_id=tenant_id, **data.model_dump())
        db.add(order)
        db.commit()
        db.refresh(order)

        return order
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.get('', response_model=list[OrderResponse])
def list_orders(
    tenant_id: int = Depends(get_current_tenant_id),
    db: Session = Depends(get_db),
):
    try:
        return db.query(Order).filter(
            Order.tenant_id == tenant_id,
        ).order_by(Order.created_at.desc(), Order.id.desc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc
