import re
from datetime import date, datetime

import pytest
from django.utils import timezone

from clinic.exceptions import InvalidInput
from clinic.services import prescriptions

pytestmark = pytest.mark.django_db

MEDICATION = {'name': 'Paracetamol', 'dosage': '500mg', 'frequency': '1+0+1', 'duration': '5 days'}


def _payload(appt, **overrides):
    data = {
        'appointmentId': appt.appointment_id,
        'diagnosis': 'Viral fever',
        'chiefComplaint': 'Fever for three days',
        'medications': [MEDICATION],
        'generalInstructions': 'Drink water',
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize('dob, today, expected', [
    (date(1990, 5, 17), date(2026, 5, 16), 35),
    (date(1990, 5, 17), date(2026, 5, 17), 36),
    (date(2000, 2, 29), date(2026, 3, 1), 26),
])
def test_age_on(dob, today, expected):
    assert prescriptions.age_on(dob, today) == expected


def test_issue_derives_patient_details(appointment, patient):
    now = timezone.make_aware(datetime(2026, 10, 19, 12, 0))
    rx = prescriptions.issue(appointment, {
        'diagnosis': 'Flu', 'chief_complaint': 'Cough', 'medications': [MEDICATION],
    }, now=now)
    assert re.fullmatch(r'RX-[0-9A-F]{8}', rx.prescription_id)
    assert rx.prescription_date == '19/10/2026'
    assert rx.patient_age == 36
    assert rx.patient_gender == patient.gender
    assert rx.patient_phone == patient.phone
    assert rx.medications[0]['instructions'] == ''


def test_incomplete_medication(appointment):
    with pytest.raises(InvalidInput):
        prescriptions.issue(appointment, {
            'diagnosis': 'Flu', 'chief_complaint': 'Cough',
            'medications': [dict(MEDICATION, dosage='  ')],
        })


class TestApi:
    def test_doctor_writes_and_patient_reads(self, client_for, appointment, doctor, patient):
        r = client_for(doctor).post('/api/prescriptions', _payload(appointment), format='json')
        assert r.status_code == 201
        rx_id = r.json()['data']['prescriptionId']

        r = client_for(patient).get('/api/prescriptions', {'appointmentId': appointment.appointment_id})
        assert r.status_code == 200
        assert r.json()['data']['prescriptionId'] == rx_id

        r = client_for(patient).get('/api/prescriptions', {'prescriptionId': rx_id})
        assert r.json()['data']['diagnosis'] == 'Viral fever'

    def test_lookup_needs_an_id(self, client_for, patient):
        r = client_for(patient).get('/api/prescriptions')
        assert r.status_code == 400

    def test_lookup_missing(self, client_for, patient):
        r = client_for(patient).get('/api/prescriptions', {'prescriptionId': 'RX-00000000'})
        assert r.status_code == 404
        assert r.json()['message'] == 'Prescription not found'

    def test_outsider_cannot_read(self, client_for, appointment, make_patient):
        prescriptions.issue(appointment, {'diagnosis': 'Flu', 'chief_complaint': 'Cough', 'medications': []})
        r = client_for(make_patient()).get('/api/prescriptions', {'appointmentId': appointment.appointment_id})
        assert r.status_code == 403

    def test_patient_cannot_write(self, client_for, appointment, patient):
        r = client_for(patient).post('/api/prescriptions', _payload(appointment), format='json')
        assert r.status_code == 403

    def test_other_doctor_cannot_write(self, client_for, appointment, make_doctor):
        r = client_for(make_doctor()).post('/api/prescriptions', _payload(appointment), format='json')
        assert r.status_code == 403

    def test_free_text_is_sanitised(self, client_for, appointment, doctor):
        payload = _payload(appointment, diagnosis='<script>alert(1)</script>Flu')
        r = client_for(doctor).post('/api/prescriptions', payload, format='json')
        assert '<script>' not in r.json()['data']['diagnosis']
