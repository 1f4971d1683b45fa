from __future__ import annotations

from clinic.exceptions import NotFound
from clinic.models import Patient
from clinic.services import uploads

EDITABLE_FIELDS = ('full_name', 'phone', 'address', 'gender', 'dob')


def get(patient_id) -> Patient:
    patient = Patient.objects.filter(pk=patient_id).first()
    if patient is None:
        raise NotFound('Patient not found')
    return patient


def update_profile(patient: Patient, changes: dict) -> Patient:
    fields = [f for f in EDITABLE_FIELDS if changes.get(f) not in (None, '')]
    for f in fields:
        setattr(patient, f, changes[f])
    if fields:
        patient.save(update_fields=fields)
    return patient


def set_picture(patient: Patient, f) -> str:
    patient.profile_picture = uploads.as_data_uri(f)
    patient.save(update_fields=['profile_picture'])
    return patient.profile_picture


def format_patient(p: Patient, *, summary: bool = False) -> dict:
    """Public view of a patient; never includes password or recovery secrets."""
    data = {
        'id': p.pk,
        'username': p.username,
        'fullName': p.full_name,
        'email': p.email,
    }
    if summary:
        return data
    data.update({
        'gender': p.gender,
        'dob': p.dob.isoformat() if p.dob else None,
        'nationalId': p.national_id,
        'phone': p.phone,
        'address': p.address,
        'profilePicture': p.profile_picture,
        'isEmailVerified': p.is_email_verified,
        'googleLinked': bool(p.google_id),
        'createdAt': p.created_at.isoformat() if p.created_at else None,
    })
    return data
