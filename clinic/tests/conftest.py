import itertools
from datetime import date

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import BmdcDoctor, Doctor, Patient
from clinic.services import appointments, sessions

PASSWORD = 'secret1'


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and cached stats live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def _fast_hashing(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_patient(db):
    counter = itertools.count(1)

    def make(**overrides):
        n = next(counter)
        data = {
            'username': f'patient{n}',
            'full_name': f'Patient {n}',
            'email': f'patient{n}@example.com',
            'gender': 'Female',
            'dob': date(1990, 5, 17),
            'national_id': f'NID-{n}',
            'phone': '01700000000',
            'address': 'Dhaka',
        }
        data.update(overrides)
        password = data.pop('password', PASSWORD)
        patient = Patient(**data)
        if password:
            patient.set_password(password)
        patient.save()
        return patient
    return make


@pytest.fixture
def make_doctor(db):
    counter = itertools.count(1)

    def make(**overrides):
        n = next(counter)
        data = {
            'username': f'doctor{n}',
            'name': f'Dr. Test {n}',
            'email': f'doctor{n}@example.com',
            'gender': 'Male',
            'phone': '01800000000',
            'bmdc_number': f'{10000 + n}',
            'speciality': 'Cardiology',
            'location': 'Dhaka',
            'designation': 'Consultant',
            'qualification': 'MBBS',
            'about': 'Heart specialist.',
        }
        data.update(overrides)
        password = data.pop('password', PASSWORD)
        doctor = Doctor(**data)
        doctor.set_password(password)
        doctor.save()
        return doctor
    return make


@pytest.fixture
def patient(make_patient):
    return make_patient()


@pytest.fixture
def doctor(make_doctor):
    return make_doctor()


@pytest.fixture
def registered_doctor(doctor):
    BmdcDoctor.objects.create(name=doctor.name, bmdc=doctor.bmdc_number)
    return doctor


@pytest.fixture
def make_appointment():
    def make(patient, doctor, **details):
        data = {
            'appointment_date': '2026-11-02',
            'appointment_day': 'Monday',
            'appointment_time': '10:00 AM',
        }
        data.update(details)
        return appointments.book(patient, doctor, data)
    return make


@pytest.fixture
def appointment(patient, doctor, make_appointment):
    return make_appointment(patient, doctor)


@pytest.fixture
def client_for():
    """APIClient authenticated as the given patient or doctor."""
    def make(identity, **issue_kwargs):
        c = APIClient()
        c.credentials(HTTP_AUTHORIZATION=f'Bearer {sessions.issue(identity, **issue_kwargs)}')
        return c
    return make
