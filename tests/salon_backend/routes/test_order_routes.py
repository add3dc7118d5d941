from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from salon_backend.models.order import Order
from salon_backend.routes.order_routes import CreateOrderRequest, create_order, list_orders


class _UnavailableSession:
    def __init__(self):
        self.rolled_back = False

    def _fail(self, *_args, **_kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    query = _fail
    add = _fail
    commit = _fail

    def rollback(self):
        self.rolled_back = True


def test_pickup_order_requires_pickup_time() -> None:
    with pytest.raises(ValidationError):
        CreateOrderRequest(delivery_type='pickup')


def test_delivery_order_requires_address_and_payment_method() -> None:
    with pytest.raises(ValidationError):
        CreateOrderRequest(delivery_type='DELIVERY', address='Calle Mayor 1')

    with pytest.raises(ValidationError):
        CreateOrderRequest(delivery_type='DELIVERY', address='Calle Mayor 1', payment_method='bitcoin')

    with pytest.raises(ValidationError):
        CreateOrderRequest(delivery_type='DELIVERY', address='   ', payment_method='card')


def test_unknown_delivery_type_is_rejected() -> None:
    with pytest.raises(ValidationError):
        CreateOrderRequest(delivery_type='DRONE')


def test_order_request_normalizes_values() -> None:
    request = CreateOrderRequest(
        delivery_type=' delivery ',
        address=' Calle Mayor 1 ',
        payment_method='cash',
        client_phone='600111222@c.us',
    )

    assert request.delivery_type == 'DELIVERY'
    assert request.payment_method == 'CASH'
    assert request.address == 'Calle Mayor 1'
    assert request.client_phone == '600111222'


def test_create_and_list_orders_newest_first(db, tenant, other_tenant) -> None:
    first = create_order(
        data=CreateOrderRequest(delivery_type='PICKUP', pickup_time='2030-01-07T18:00:00+01:00', total=12.5),
        tenant_id=tenant.id,
        db=db,
    )
    second = create_order(
        data=CreateOrderRequest(delivery_type='DELIVERY', address='Calle Mayor 1', payment_method='CARD'),
        tenant_id=tenant.id,
        db=db,
    )
    create_order(
        data=CreateOrderRequest(delivery_type='DELIVERY', address='Calle Sol 2', payment_method='CASH'),
        tenant_id=other_tenant.id,
        db=db,
    )

    orders = list_orders(tenant_id=tenant.id, db=db)

    assert first.pickup_time == datetime(2030, 1, 7, 17, 0)
    assert first.total == 12.5
    assert [order.id for order in orders] == [second.id, first.id]


def test_list_orders_reports_unavailable_database() -> None:
    with pytest.raises(HTTPException) as exception_info:
        list_orders(tenant_id=1, db=_UnavailableSession())

    assert exception_info.value.status_code == 503


def test_create_order_rolls_back_and_reports_unavailable_database() -> None:
    session = _UnavailableSession()

    with pytest.raises(HTTPException) as exception_info:
        create_order(
            data=CreateOrderRequest(delivery_type='DELIVERY', address='Calle Mayor 1', payment_method='CARD'),
            tenant_id=1,
            db=session,
        )

    assert exception_info.value.status_code == 503
    assert session.rolled_back is True


def test_order_created_at_is_naive_utc(db, tenant) -> None:
    before = datetime.now(timezone.utc).replace(tzinfo=None)

    order = create_order(
        data=CreateOrderRequest(delivery_type='DELIVERY', address='Calle Mayor 1', payment_method='CARD'),
        tenant_id=tenant.id,
        db=db,
    )

    stored = db.get(Order, order.id)
    assert stored.created_at.tzinfo is None
    assert before <= stored.created_at <= datetime.now(timezone.utc).replace(tzinfo=None)
