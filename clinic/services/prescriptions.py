from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from django.utils import timezone

from clinic.exceptions import InvalidInput, NotFound
from clinic.models import Appointment, Prescription

logger = logging.getLogger(__name__)

MEDICATION_KEYS = ('name', 'dosage', 'frequency', 'duration', 'instructions')


def new_prescription_id() -> str:
    return f"RX-{uuid.uuid4().hex[:8].upper()}"


def age_on(dob: date, today: date) -> int:
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return max(years, 0)


def _clean_medications(items) -> list:
    cleaned = []
    for item in items or []:
        if not all((item.get(k) or '').strip() for k in MEDICATION_KEYS[:4]):
            raise InvalidInput('Please fill in all medication fields')
        cleaned.append({k: (item.get(k) or '').strip() for k in MEDICATION_KEYS})
    return cleaned


def issue(appointment: Appointment, details: dict, *, now=None) -> Prescription:
    """Write a prescription for ``appointment``.

    Patient and doctor details are copied from the appointment's records
    so the prescription stays readable if those change later.
    """
    now = now or timezone.now()
    today = timezone.localdate(now)
    patient, doctor = appointment.patient, appointment.doctor
    rx = Prescription.objects.create(
        prescription_id=new_prescription_id(),
        appointment=appointment,
        patient=patient,
        patient_name=appointment.patient_name,
        patient_age=age_on(patient.dob, today),
        patient_gender=patient.gender,
        patient_phone=patient.phone,
        doctor=doctor,
        doctor_name=appointment.doctor_name,
        doctor_speciality=appointment.speciality,
        doctor_qualification=appointment.qualification,
        doctor_designation=appointment.designation,
        diagnosis=details['diagnosis'],
        chief_complaint=details['chief_complaint'],
        medications=_clean_medications(details.get('medications')),
        general_instructions=details.get('general_instructions') or '',
        next_visit_date=details.get('next_visit_date') or '',
        prescription_date=today.strftime('%d/%m/%Y'),
    )
    logger.info('prescription issued id=%s appointment=%s', rx.prescription_id, appointment.appointment_id)
    return rx


def lookup(*, appointment_id: Optional[str] = None, prescription_id: Optional[str] = None) -> Prescription:
    if appointment_id:
        qs = Prescription.objects.filter(appointment__appointment_id=appointment_id)
    elif prescription_id:
        qs = Prescription.objects.filter(prescription_id=prescription_id)
    else:
        raise InvalidInput('appointmentId or prescriptionId is required')
    rx = qs.select_related('appointment').order_by('-created_at', '-id').first()
    if rx is None:
        raise NotFound('Prescription not found')
    return rx


def format_prescription(rx: Prescription) -> dict:
    return {
        'prescriptionId': rx.prescription_id,
        'appointmentId': rx.appointment.appointment_id,
        'patientId': rx.patient_id,
        'patientName': rx.patient_name,
        'patientAge': rx.patient_age,
        'patientGender': rx.patient_gender,
        'patientPhone': rx.patient_phone,
        'doctorId': rx.doctor_id,
        'doctorName': rx.doctor_name,
        'doctorSpeciality': rx.doctor_speciality,
        'doctorQualification': rx.doctor_qualification,
        'doctorDesignation': rx.doctor_designation,
        'diagnosis': rx.diagnosis,
        'chiefComplaint': rx.chief_complaint,
        'medications': rx.medications,
        'generalInstructions': rx.general_instructions,
        'nextVisitDate': rx.next_visit_date,
        'prescriptionDate': rx.prescription_date,
        'createdAt': rx.created_at.isoformat() if rx.created_at else None,
    }
