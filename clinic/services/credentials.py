"""
Credential lifecycle for patients and doctors.

Registration, password checks, one-time codes and reset tokens.  Every
function that depends on the clock takes an optional ``now`` so callers
(and tests) can pin time; otherwise ``django.utils.timezone.now()`` is used.
"""
from __future__ import annotations

import hashlib
import logging
import secrets
from typing import Optional, Type, Union

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from clinic.exceptions import (
    DuplicateIdentity,
    InvalidCredentials,
    InvalidOrExpiredCode,
    MailDeliveryFailed,
    NotFound,
    RegistryVerificationFailed,
    WeakPassword,
)
from clinic.models import BmdcDoctor, Doctor, Patient
from clinic.services import mailer, uploads

logger = logging.getLogger(__name__)

Identity = Union[Patient, Doctor]

PATIENT_FIELDS = ('username', 'full_name', 'email', 'gender', 'dob', 'national_id', 'phone', 'address')
DOCTOR_FIELDS = (
    'username', 'name', 'email', 'gender', 'phone', 'bmdc_number',
    'speciality', 'location', 'designation', 'qualification', 'about',
)


def check_password_strength(raw_password: Optional[str]) -> None:
    if not raw_password or len(raw_password) < settings.MIN_PASSWORD_LENGTH:
        raise WeakPassword(f'Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long')


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


# ---------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------
def register_patient(details: dict) -> Patient:
    """Create a patient; any clash on email, username or national id fails."""
    email = details['email'].strip().lower()
    clash = Patient.objects.filter(
        Q(email=email) | Q(username=details['username']) | Q(national_id=details['national_id'])
    ).exists()
    if clash:
        raise DuplicateIdentity('Patient already exists with this email, username, or national ID')
    check_password_strength(details.get('password'))

    patient = Patient(**{f: details.get(f, '') for f in PATIENT_FIELDS})
    patient.email = email
    patient.set_password(details['password'])
    try:
        with transaction.atomic():
            patient.save()
    except IntegrityError:
        # lost a race against a concurrent registration with the same keys
        raise DuplicateIdentity('Patient already exists with this email, username, or national ID')
    logger.info('patient registered id=%s username=%s', patient.pk, patient.username)
    return patient


def register_doctor(details: dict, picture=None) -> Doctor:
    """Create an unverified doctor; ``picture`` is an optional uploaded image."""
    email = details['email'].strip().lower()
    clash = Doctor.objects.filter(
        Q(email=email) | Q(username=details['username']) | Q(bmdc_number=details['bmdc_number'])
    ).exists()
    if clash:
        raise DuplicateIdentity('Doctor already exists with this email, username, or BMDC number')
    check_password_strength(details.get('password'))

    doctor = Doctor(**{f: details.get(f, '') for f in DOCTOR_FIELDS})
    doctor.email = email
    doctor.is_registered = False
    doctor.set_password(details['password'])
    doctor.profile_picture = uploads.store_doctor_picture(picture) if picture else uploads.DEFAULT_AVATAR
    try:
        with transaction.atomic():
            doctor.save()
    except IntegrityError:
        raise DuplicateIdentity('Doctor already exists with this email, username, or BMDC number')
    logger.info('doctor registered id=%s username=%s', doctor.pk, doctor.username)
    return doctor


# ---------------------------------------------------------------------
# Password login
# ---------------------------------------------------------------------
def _authenticate(model: Type[Identity], username: str, password: str) -> Identity:
    identity = model.objects.filter(username=username).first()
    if identity is None or not identity.check_password(password):
        logger.info('%s login failed username=%s', model.ROLE, username)
        raise InvalidCredentials()
    return identity


def authenticate_patient(username: str, password: str) -> Patient:
    return _authenticate(Patient, username, password)


def authenticate_doctor(username: str, password: str) -> Doctor:
    return _authenticate(Doctor, username, password)


def verify_doctor_registration(doctor: Doctor, bmdc_number: str) -> Doctor:
    """Cross-check the supplied BMDC number against the doctor and the registry.

    Both checks must pass; only then does ``is_registered`` become true.
    """
    if not doctor.bmdc_number or doctor.bmdc_number != bmdc_number:
        logger.info('bmdc mismatch doctor=%s', doctor.pk)
        raise RegistryVerificationFailed('BMDC number does not match.')
    if not BmdcDoctor.objects.filter(name=doctor.name, bmdc=doctor.bmdc_number).exists():
        logger.info('bmdc registry lookup failed doctor=%s', doctor.pk)
        raise RegistryVerificationFailed()
    if not doctor.is_registered:
        doctor.is_registered = True
        doctor.save(update_fields=['is_registered'])
    return doctor


# ---------------------------------------------------------------------
# One-time codes
# ---------------------------------------------------------------------
def generate_one_time_code(identity: Identity, *, now=None) -> str:
    """Store a fresh 4 digit code on ``identity``, replacing any earlier one."""
    now = now or timezone.now()
    code = str(secrets.randbelow(9000) + 1000)
    identity.otp_code = code
    identity.otp_expire = now + settings.OTP_TTL
    identity.save(update_fields=['otp_code', 'otp_expire'])
    return code


def _code_matches(identity: Identity, code, now) -> bool:
    if not identity.otp_code or identity.otp_expire is None or code in (None, ''):
        return False
    if not secrets.compare_digest(identity.otp_code, str(code)):
        return False
    return now < identity.otp_expire


def find_by_email(model: Type[Identity], email: str) -> Optional[Identity]:
    return model.objects.filter(email=(email or '').strip().lower()).first()


def verify_one_time_code(model: Type[Identity], email: str, code, *, now=None) -> Identity:
    """Check a code without consuming it."""
    now = now or timezone.now()
    identity = find_by_email(model, email)
    if identity is None or not _code_matches(identity, code, now):
        raise InvalidOrExpiredCode()
    return identity


def consume_one_time_code(identity: Identity, code, *, now=None) -> None:
    """Check ``code`` and clear it so it cannot be used again."""
    now = now or timezone.now()
    if not _code_matches(identity, code, now):
        raise InvalidOrExpiredCode()
    identity.clear_otp()
    identity.save(update_fields=['otp_code', 'otp_expire'])


def reset_password_with_code(model: Type[Identity], email: str, code, new_password: str, *, now=None) -> Identity:
    check_password_strength(new_password)
    with transaction.atomic():
        identity = model.objects.select_for_update().filter(email=(email or '').strip().lower()).first()
        if identity is None:
            raise InvalidOrExpiredCode()
        consume_one_time_code(identity, code, now=now)
        reset_credential(identity, new_password)
    logger.info('%s password reset by code id=%s', model.ROLE, identity.pk)
    return identity


# ---------------------------------------------------------------------
# Reset links (patients)
# ---------------------------------------------------------------------
def issue_reset_token(patient: Patient, *, now=None) -> str:
    """Return a raw reset token; only its sha256 digest is stored."""
    now = now or timezone.now()
    raw = secrets.token_hex(20)
    patient.reset_password_token = hash_reset_token(raw)
    patient.reset_password_expire = now + settings.RESET_TOKEN_TTL
    patient.save(update_fields=['reset_password_token', 'reset_password_expire'])
    return raw


def reset_password_with_token(raw_token: str, new_password: str, *, now=None) -> Patient:
    now = now or timezone.now()
    check_password_strength(new_password)
    with transaction.atomic():
        patient = (
            Patient.objects.select_for_update()
            .filter(reset_password_token=hash_reset_token(raw_token), reset_password_expire__gt=now)
            .first()
        )
        if patient is None:
            raise InvalidOrExpiredCode('Invalid or expired password reset token')
        reset_credential(patient, new_password)
    logger.info('patient password reset by link id=%s', patient.pk)
    return patient


def reset_credential(identity: Identity, new_password: str) -> Identity:
    """Re-hash the password and drop every outstanding recovery secret."""
    check_password_strength(new_password)
    identity.set_password(new_password)
    identity.clear_otp()
    fields = ['password', 'otp_code', 'otp_expire']
    if isinstance(identity, Patient):
        identity.clear_reset_token()
        fields += ['reset_password_token', 'reset_password_expire']
    identity.save(update_fields=fields)
    return identity


# ---------------------------------------------------------------------
# Recovery mails
# ---------------------------------------------------------------------
def mail_one_time_code(model: Type[Identity], email: str, missing_message: str) -> Identity:
    """Issue a code for the account behind ``email`` and mail it.

    If the mail cannot be sent the code is cleared again, so a code
    nobody received never stays valid.
    """
    identity = find_by_email(model, email)
    if identity is None:
        raise NotFound(missing_message)
    code = generate_one_time_code(identity)
    try:
        mailer.send_one_time_code(identity, code)
    except Exception as e:
        logger.warning('otp mail failed %s=%s: %s', model.ROLE, identity.pk, e)
        identity.clear_otp()
        identity.save(update_fields=['otp_code', 'otp_expire'])
        raise MailDeliveryFailed()
    return identity


def mail_reset_link(email: str) -> Patient:
    patient = find_by_email(Patient, email)
    if patient is None:
        raise NotFound('No account found with that email address')
    token = issue_reset_token(patient)
    try:
        mailer.send_reset_link(patient, token)
    except Exception as e:
        logger.warning('reset link mail failed patient=%s: %s', patient.pk, e)
        patient.clear_reset_token()
        patient.save(update_fields=['reset_password_token', 'reset_password_expire'])
        raise MailDeliveryFailed()
    return patient
