"""
Outbound notification mails.

Thin wrappers over Django's mail API so that views and services never
build messages themselves.  Every helper raises whatever the configured
backend raises; callers decide whether a failed send is fatal.
"""
import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


def _minutes(delta) -> int:
    return int(delta.total_seconds() // 60)


def _send(to: str, subject: str, template: str, context: dict) -> None:
    html = render_to_string(template, context)
    msg = EmailMultiAlternatives(
        subject=subject,
        body=strip_tags(html),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to],
    )
    msg.attach_alternative(html, 'text/html')
    msg.send(fail_silently=False)
    logger.info('mail sent subject=%r to=%s', subject, to)


def send_reset_link(patient, token: str) -> None:
    reset_url = f"{settings.CLIENT_URL}/reset-password/{token}"
    _send(
        patient.email,
        'Password Reset Request - TreatWell',
        'clinic/email/password_reset_link.html',
        {'name': patient.full_name, 'reset_url': reset_url, 'ttl_minutes': _minutes(settings.RESET_TOKEN_TTL)},
    )


def send_one_time_code(identity, code: str) -> None:
    is_doctor = identity.role == 'doctor'
    name = identity.name if is_doctor else identity.full_name
    subject = 'Password Reset OTP - TreatWell Doctor Portal' if is_doctor else 'Password Reset OTP - TreatWell'
    _send(
        identity.email,
        subject,
        'clinic/email/password_reset_otp.html',
        {'name': name, 'code': code, 'is_doctor': is_doctor, 'ttl_minutes': _minutes(settings.OTP_TTL)},
    )


def send_meeting_scheduled(appointment, email: str) -> None:
    _send(
        email,
        f'Meeting Scheduled - Dr. {appointment.doctor_name}',
        'clinic/email/meeting_scheduled.html',
        {'appointment': appointment},
    )
