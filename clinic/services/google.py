"""
Google sign-in for patients.

``exchange_code`` talks to Google (authorization code -> access token ->
userinfo) and is the only part that touches the network; tests replace
it.  ``bind_or_create_patient`` consumes the verified profile.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from clinic.exceptions import AccountConflict, InvalidCredentials, ServiceDisabled
from clinic.models import Patient

logger = logging.getLogger(__name__)

TOKEN_URL = 'https://oauth2.googleapis.com/token'
USERINFO_URL = 'https://www.googleapis.com/oauth2/v2/userinfo'


@dataclass
class GoogleProfile:
    google_id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


def exchange_code(code: str) -> GoogleProfile:
    if not settings.GOOGLE_CLIENT_ID:
        raise ServiceDisabled('Google sign-in not enabled on server')
    try:
        r = requests.post(TOKEN_URL, data={
            'code': code,
            'client_id': settings.GOOGLE_CLIENT_ID,
            'client_secret': settings.GOOGLE_CLIENT_SECRET,
            'redirect_uri': settings.GOOGLE_REDIRECT_URI,
            'grant_type': 'authorization_code',
        }, timeout=settings.GOOGLE_TIMEOUT)
        r.raise_for_status()
        access_token = r.json().get('access_token')
        if not access_token:
            raise InvalidCredentials('Google authentication failed')

        r = requests.get(USERINFO_URL, headers={'Authorization': f'Bearer {access_token}'},
                         timeout=settings.GOOGLE_TIMEOUT)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        logger.info('google exchange failed: %s', e)
        raise InvalidCredentials('Google authentication failed')
    if not data.get('email') or not data.get('id'):
        raise InvalidCredentials('Unable to get user email from Google')
    return GoogleProfile(
        google_id=str(data['id']),
        email=data['email'].lower(),
        name=data.get('name'),
        picture=data.get('picture'),
    )


def _free_username(base: str) -> str:
    base = base or 'user'
    candidate, n = base, 1
    while Patient.objects.filter(username=candidate).exists():
        n += 1
        candidate = f'{base}{n}'
    return candidate


def bind_or_create_patient(profile: GoogleProfile):
    """Return ``(patient, is_new)`` for a verified Google profile.

    An email already registered with a password (no Google link) is a
    conflict: the account must be used with its regular credentials. So is
    an email already linked to a different Google account.
    """
    existing = Patient.objects.filter(email=profile.email).first()
    if existing is not None:
        if existing.google_id == profile.google_id:
            return existing, False
        logger.info('google sign-in refused for account id=%s', existing.pk)
        raise AccountConflict()

    patient = Patient(
        username=_free_username(profile.email.split('@')[0]),
        full_name=profile.name or 'Google User',
        email=profile.email,
        google_id=profile.google_id,
        profile_picture=profile.picture,
        is_email_verified=True,
        gender='not-specified',
        dob=timezone.localdate(),
        national_id=f'google-{profile.google_id}',
        phone='not-provided',
        address='not-provided',
    )
    try:
        with transaction.atomic():
            patient.save()
    except IntegrityError:
        # a concurrent first sign-in created the row
        patient = Patient.objects.filter(google_id=profile.google_id).first()
        if patient is None:
            raise AccountConflict()
        return patient, False
    logger.info('patient created from google id=%s', patient.pk)
    return patient, True
