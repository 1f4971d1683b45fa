"""
Appointment ledger.

Appointments are addressed by their public ``appointment_id`` (a uuid4
string).  Status and payment are independent field groups: a partial
update only touches the fields it names.  No slot availability check is
made when booking.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.utils import timezone

from clinic.exceptions import InvalidInput, NotFound
from clinic.models import Appointment, Doctor, Patient
from clinic.services import mailer

logger = logging.getLogger(__name__)

SLOT_FIELDS = ('appointment_date', 'appointment_day', 'appointment_time')


@dataclass
class MeetingOutcome:
    appointment: Appointment
    notified: bool
    error: Optional[str] = None


def book(patient: Patient, doctor: Doctor, details: dict) -> Appointment:
    """Create a pending, unpaid appointment for ``patient`` with ``doctor``."""
    missing = [f for f in SLOT_FIELDS if not details.get(f)]
    if missing:
        raise InvalidInput(f'Missing appointment fields: {", ".join(missing)}')
    appt = Appointment.objects.create(
        patient=patient,
        patient_name=patient.full_name,
        doctor=doctor,
        doctor_name=doctor.name,
        speciality=doctor.speciality,
        doctor_info=details.get('doctor_info') or doctor.about,
        location=doctor.location,
        designation=doctor.designation,
        qualification=doctor.qualification,
        appointment_date=details['appointment_date'],
        appointment_day=details['appointment_day'],
        appointment_time=details['appointment_time'],
    )
    logger.info('appointment booked id=%s patient=%s doctor=%s', appt.appointment_id, patient.pk, doctor.pk)
    return appt


def get(appointment_id: str) -> Appointment:
    appt = Appointment.objects.filter(appointment_id=appointment_id).first()
    if appt is None:
        raise NotFound('Appointment not found')
    return appt


def list_for(*, patient_id=None, doctor_id=None, status: Optional[str] = None):
    qs = Appointment.objects.all()
    if patient_id is not None:
        qs = qs.filter(patient_id=patient_id)
    if doctor_id is not None:
        qs = qs.filter(doctor_id=doctor_id)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by('-created_at', '-id')


def update(appointment_id: str, *, status: Optional[str] = None, payment_status: Optional[str] = None,
           payment_amount: Optional[Decimal] = None, now=None) -> Appointment:
    """Apply a partial update; untouched field groups keep their values."""
    if status is None and payment_status is None and payment_amount is None:
        raise InvalidInput('Nothing to update')
    now = now or timezone.now()
    with transaction.atomic():
        appt = Appointment.objects.select_for_update().filter(appointment_id=appointment_id).first()
        if appt is None:
            raise NotFound('Appointment not found')
        fields = []
        if status is not None:
            appt.status = status
            fields.append('status')
        if payment_status is not None:
            appt.payment_status = payment_status
            fields.append('payment_status')
            if payment_status == Appointment.PAYMENT_PAID:
                appt.payment_date = now
                fields.append('payment_date')
        if payment_amount is not None:
            appt.payment_amount = payment_amount
            fields.append('payment_amount')
        appt.save(update_fields=fields)
    logger.info('appointment updated id=%s fields=%s', appointment_id, ','.join(fields))
    return appt


def schedule_meeting(appointment_id: str, link: str, meeting_time: str) -> MeetingOutcome:
    """Record meeting details, then notify the patient.

    The write is committed before the mail is attempted and is kept even
    when sending fails; ``meeting_email_sent`` only flips after a
    successful send.
    """
    with transaction.atomic():
        appt = Appointment.objects.select_for_update().select_related('patient').filter(
            appointment_id=appointment_id).first()
        if appt is None:
            raise NotFound('Appointment not found')
        appt.meeting_link = link
        appt.meeting_time = meeting_time
        appt.meeting_scheduled = True
        appt.meeting_email_sent = False
        appt.save(update_fields=['meeting_link', 'meeting_time', 'meeting_scheduled', 'meeting_email_sent'])

    try:
        mailer.send_meeting_scheduled(appt, appt.patient.email)
    except Exception as e:
        logger.warning('meeting mail failed appointment=%s: %s', appointment_id, e)
        return MeetingOutcome(appointment=appt, notified=False, error=str(e))

    appt.meeting_email_sent = True
    appt.save(update_fields=['meeting_email_sent'])
    return MeetingOutcome(appointment=appt, notified=True)


def delete(appointment_id: str) -> None:
    deleted, _ = Appointment.objects.filter(appointment_id=appointment_id).delete()
    if not deleted:
        raise NotFound('Appointment not found')
    logger.info('appointment deleted id=%s', appointment_id)


def format_appointment(a: Appointment) -> dict:
    return {
        'appointmentId': a.appointment_id,
        'patientId': a.patient_id,
        'patientName': a.patient_name,
        'doctorId': a.doctor_id,
        'doctorName': a.doctor_name,
        'speciality': a.speciality,
        'doctorInfo': a.doctor_info,
        'location': a.location,
        'designation': a.designation,
        'qualification': a.qualification,
        'appointmentDate': a.appointment_date,
        'appointmentDay': a.appointment_day,
        'appointmentTime': a.appointment_time,
        'status': a.status,
        'paymentStatus': a.payment_status,
        'paymentAmount': float(a.payment_amount),
        'paymentDate': a.payment_date.isoformat() if a.payment_date else None,
        'meetingLink': a.meeting_link,
        'meetingTime': a.meeting_time,
        'meetingScheduled': a.meeting_scheduled,
        'meetingEmailSent': a.meeting_email_sent,
        'createdAt': a.created_at.isoformat() if a.created_at else None,
    }
