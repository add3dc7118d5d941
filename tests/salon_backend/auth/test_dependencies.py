from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from salon_backend.auth import jwt_handler
from salon_backend.auth.dependencies import get_current_tenant_id
from salon_backend.core import config


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)


def test_token_round_trip_resolves_tenant(db, tenant) -> None:
    token = jwt_handler.create_access_token(tenant.id)

    assert get_current_tenant_id(credentials=_credentials(token), db=db) == tenant.id


def test_invalid_token_is_rejected(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_current_tenant_id(credentials=_credentials('not-a-token'), db=db)

    assert exception_info.value.status_code == 401


def test_expired_token_is_rejected(db, tenant) -> None:
    payload = {'sub': str(tenant.id), 'exp': datetime.now(timezone.utc) - timedelta(minutes=1)}
    token = jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)

    with pytest.raises(HTTPException) as exception_info:
        get_current_tenant_id(credentials=_credentials(token), db=db)

    assert exception_info.value.status_code == 401


def test_non_numeric_subject_is_rejected(db) -> None:
    token = jwt.encode({'sub': 'studio'}, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)

    with pytest.raises(HTTPException) as exception_info:
        get_current_tenant_id(credentials=_credentials(token), db=db)

    assert exception_info.value.detail == 'Invalid token subject'


def test_inactive_subscription_is_forbidden(db, tenant) -> None:
    tenant.subscription_active = False
    db.commit()
    token = jwt_handler.create_access_token(tenant.id)

    with pytest.raises(HTTPException) as exception_info:
        get_current_tenant_id(credentials=_credentials(token), db=db)

    assert exception_info.value.status_code == 403


def test_unknown_tenant_is_forbidden(db) -> None:
    token = jwt_handler.create_access_token(404)

    with pytest.raises(HTTPException) as exception_info:
        get_current_tenant_id(credentials=_credentials(token), db=db)

    assert exception_info.value.status_code == 403
