"""
Bearer session tokens.

A session token is an HS256 JWT carrying the identity id and its role.
Validity is purely time-bounded: there is no revocation list, so a token
stays usable until ``exp`` passes.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional, Union

import jwt
from django.conf import settings
from django.utils import timezone

from clinic.exceptions import ExpiredToken, InvalidToken
from clinic.models import Doctor, Patient

ROLES = {Patient.ROLE: Patient, Doctor.ROLE: Doctor}


@dataclass(frozen=True)
class SessionClaims:
    id: int
    role: str
    issued_at: datetime
    expires_at: datetime


def lifetime_for(role: str) -> timedelta:
    if role == Doctor.ROLE:
        return settings.DOCTOR_TOKEN_LIFETIME
    return settings.PATIENT_TOKEN_LIFETIME


def issue(identity: Union[Patient, Doctor], *, lifetime: Optional[timedelta] = None, now=None) -> str:
    """Sign a token for ``identity`` valid for its role's lifetime."""
    now = now or timezone.now()
    lifetime = lifetime if lifetime is not None else lifetime_for(identity.role)
    payload = {
        'id': identity.pk,
        'role': identity.role,
        'iat': int(now.timestamp()),
        'exp': int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def validate(token: str) -> SessionClaims:
    """Decode and check ``token``; raises InvalidToken or ExpiredToken."""
    if not token:
        raise InvalidToken('No token provided')
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={'require': ['exp', 'iat']},
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredToken()
    except jwt.InvalidTokenError:
        raise InvalidToken()

    ident = payload.get('id')
    role = payload.get('role')
    if isinstance(ident, bool) or not isinstance(ident, int) or role not in ROLES:
        raise InvalidToken('Malformed token payload')
    return SessionClaims(
        id=ident,
        role=role,
        issued_at=datetime.fromtimestamp(payload['iat'], tz=dt_timezone.utc),
        expires_at=datetime.fromtimestamp(payload['exp'], tz=dt_timezone.utc),
    )


def resolve(claims: SessionClaims) -> Union[Patient, Doctor]:
    """Load the identity record a validated token points to."""
    model = ROLES[claims.role]
    identity = model.objects.filter(pk=claims.id).first()
    if identity is None:
        raise InvalidToken('Account no longer exists')
    return identity
