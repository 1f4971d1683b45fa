from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.utils.text import slugify

from clinic.exceptions import DuplicateIdentity, NotFound
from clinic.models import Doctor
from clinic.services import uploads
from clinic.text import plain_text

logger = logging.getLogger(__name__)

DEMO_DOCTORS = [
    {'name': 'Dr. Sarah Johnson', 'speciality': 'Cardiology', 'is_registered': True,
     'location': 'New York, USA', 'designation': 'Senior Cardiologist', 'qualification': 'MD, FACC',
     'about': 'Specialized in preventive cardiology and heart disease management.', 'phone': '+1234567890'},
    {'name': 'Dr. Michael Chen', 'speciality': 'Neurology', 'is_registered': True,
     'location': 'San Francisco, USA', 'designation': 'Consultant Neurologist', 'qualification': 'MD, PhD',
     'about': 'Expert in neurological disorders and brain health management.', 'phone': '+1987654321'},
    {'name': 'Dr. Emily Rodriguez', 'speciality': 'Pediatrics', 'is_registered': True,
     'location': 'Miami, USA', 'designation': 'Pediatrician', 'qualification': 'MBBS, DCH',
     'about': 'Dedicated to providing comprehensive care for children of all ages.', 'phone': '+1122334455'},
    {'name': 'Dr. James Wilson', 'speciality': 'Orthopedics', 'is_registered': False,
     'location': 'Chicago, USA', 'designation': 'Orthopedic Surgeon', 'qualification': 'MS, FRCS',
     'about': 'Specialized in sports injuries and joint replacement surgery.', 'phone': '+1556677889'},
]

EDITABLE_FIELDS = ('name', 'username', 'phone', 'gender', 'speciality', 'location',
                   'designation', 'qualification', 'about')


def seed_demo_doctors() -> int:
    """Insert the demo directory; a no-op once any doctor exists."""
    with transaction.atomic():
        if Doctor.objects.exists():
            return 0
        rows = []
        for data in DEMO_DOCTORS:
            handle = slugify(data['name'])
            rows.append(Doctor(username=handle, email=f'{handle}@demo.treatwell.local', **data))
        Doctor.objects.bulk_create(rows)
    logger.info('seeded %d demo doctors', len(rows))
    return len(rows)


def list_doctors(speciality: Optional[str] = None):
    if not Doctor.objects.exists():
        seed_demo_doctors()
    qs = Doctor.objects.all()
    if speciality:
        qs = qs.filter(speciality__iexact=speciality.strip())
    return qs.order_by('name', 'id')


def specialities() -> list:
    """Distinct specialities, case-insensitive, capitalised and sorted."""
    seen = {}
    for label in Doctor.objects.values_list('speciality', flat=True).distinct():
        label = (label or '').strip()
        if label and label.lower() not in seen:
            seen[label.lower()] = label[0].upper() + label[1:].lower()
    return sorted(seen.values())


def get(doctor_id) -> Doctor:
    doctor = Doctor.objects.filter(pk=doctor_id).first()
    if doctor is None:
        raise NotFound('Doctor not found')
    return doctor


def update_profile(doctor: Doctor, changes: dict) -> Doctor:
    """Apply non-empty values from ``changes``; empty values keep the old ones."""
    fields = []
    for field in EDITABLE_FIELDS:
        value = changes.get(field)
        if value in (None, ''):
            continue
        if field == 'about':
            value = plain_text(value)
        setattr(doctor, field, value)
        fields.append(field)
    if 'username' in fields and Doctor.objects.filter(username=doctor.username).exclude(pk=doctor.pk).exists():
        raise DuplicateIdentity('Username is already taken')
    if fields:
        doctor.save(update_fields=fields)
    return doctor


def set_picture(doctor: Doctor, f) -> str:
    doctor.profile_picture = uploads.store_doctor_picture(f)
    doctor.save(update_fields=['profile_picture'])
    return doctor.profile_picture


def format_doctor(d: Doctor) -> dict:
    return {
        'id': d.pk,
        'username': d.username,
        'name': d.name,
        'email': d.email,
        'gender': d.gender,
        'phone': d.phone,
        'bmdcNumber': d.bmdc_number,
        'speciality': d.speciality,
        'location': d.location,
        'designation': d.designation,
        'qualification': d.qualification,
        'about': d.about,
        'profilePicture': d.profile_picture,
        'isRegistered': d.is_registered,
    }
