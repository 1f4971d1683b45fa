from io import StringIO

import pytest
from django.core.management import call_command
from django.test import RequestFactory

from clinic.handlers import api_exception_handler
from clinic.models import BmdcDoctor, Doctor
from clinic.services import doctors

pytestmark = pytest.mark.django_db


class TestDoctorDirectory:
    def test_empty_directory_is_seeded_once(self, api_client):
        data = api_client.get('/api/doctors').json()['data']
        assert len(data) == len(doctors.DEMO_DOCTORS)
        assert 'password' not in data[0]
        api_client.get('/api/doctors')
        assert Doctor.objects.count() == len(doctors.DEMO_DOCTORS)

    def test_no_seeding_when_doctors_exist(self, api_client, doctor):
        data = api_client.get('/api/doctors').json()['data']
        assert [d['id'] for d in data] == [doctor.pk]

    def test_speciality_filter_is_case_insensitive(self, api_client, make_doctor):
        cardio = make_doctor(speciality='Cardiology')
        make_doctor(speciality='Neurology')
        data = api_client.get('/api/doctors', {'speciality': 'cardiology'}).json()['data']
        assert [d['id'] for d in data] == [cardio.pk]

    def test_specialities(self, api_client, make_doctor):
        for s in ('cardiology', 'Cardiology', 'NEUROLOGY', ' pediatrics '):
            make_doctor(speciality=s)
        r = api_client.get('/api/doctors/specialities')
        assert r.json()['data'] == ['Cardiology', 'Neurology', 'Pediatrics']

    def test_detail(self, api_client, doctor):
        assert api_client.get(f'/api/doctors/{doctor.pk}').json()['data']['name'] == doctor.name
        assert api_client.get('/api/doctors/999').status_code == 404


class TestDoctorUpdate:
    def test_own_profile(self, client_for, doctor):
        r = client_for(doctor).put(f'/api/doctors/{doctor.pk}', {'location': 'Chattogram', 'about': ''},
                                   format='json')
        assert r.status_code == 200
        data = r.json()['data']
        assert data['location'] == 'Chattogram'
        assert data['about'] == 'Heart specialist.'

    def test_about_is_plain_text(self, client_for, doctor):
        r = client_for(doctor).put(f'/api/doctors/{doctor.pk}', {'about': '<p>Heart & lungs</p>'}, format='json')
        assert r.json()['data']['about'] == 'Heart & lungs'

    def test_someone_else(self, client_for, doctor, make_doctor):
        r = client_for(make_doctor()).put(f'/api/doctors/{doctor.pk}', {'location': 'X'}, format='json')
        assert r.status_code == 403

    def test_anonymous(self, api_client, doctor):
        assert api_client.put(f'/api/doctors/{doctor.pk}', {'location': 'X'}, format='json').status_code == 401

    def test_username_taken(self, client_for, doctor, make_doctor):
        other = make_doctor()
        r = client_for(doctor).put(f'/api/doctors/{doctor.pk}', {'username': other.username}, format='json')
        assert r.status_code == 400
        assert r.json()['code'] == 'DuplicateIdentity'


class TestPatientDetail:
    def test_self(self, client_for, patient):
        data = client_for(patient).get(f'/api/patients/{patient.pk}').json()['data']
        assert data['nationalId'] == patient.national_id
        assert 'password' not in data and 'otpCode' not in data

    def test_treating_doctor(self, client_for, appointment, doctor, patient):
        assert client_for(doctor).get(f'/api/patients/{patient.pk}').status_code == 200

    def test_unrelated(self, client_for, patient, make_patient, make_doctor):
        assert client_for(make_patient()).get(f'/api/patients/{patient.pk}').status_code == 403
        assert client_for(make_doctor()).get(f'/api/patients/{patient.pk}').status_code == 403


def test_stats_are_cached(api_client, patient, doctor, appointment, make_patient):
    data = api_client.get('/api/stats').json()['data']
    assert data == {'totalAppointments': 1, 'totalDoctors': 1, 'totalPatients': 1}
    make_patient()
    assert api_client.get('/api/stats').json()['data']['totalPatients'] == 1


class TestRegistrySeed:
    def test_seed(self, api_client, settings):
        settings.REGISTRY_SEED_ENABLE = True
        BmdcDoctor.objects.create(name='Dr. Stale', bmdc='1')
        r = api_client.post('/api/seed-bmdc')
        assert r.status_code == 200
        assert BmdcDoctor.objects.count() == 5
        assert not BmdcDoctor.objects.filter(bmdc='1').exists()

    def test_disabled(self, api_client, settings):
        settings.REGISTRY_SEED_ENABLE = False
        r = api_client.post('/api/seed-bmdc')
        assert r.status_code == 501
        assert r.json()['success'] is False

    def test_management_command(self):
        out = StringIO()
        call_command('seed_bmdc', stdout=out)
        assert '5 entries' in out.getvalue()


def test_ensure_test_users_is_idempotent():
    call_command('ensure_test_users', stdout=StringIO())
    call_command('ensure_test_users', stdout=StringIO())
    doctor = Doctor.objects.get(username='doctor1')
    assert doctor.check_password('123456')
    assert BmdcDoctor.objects.filter(name=doctor.name, bmdc=doctor.bmdc_number).exists()


def test_healthz(client):
    r = client.get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'success': True, 'db': True}


def test_request_id_is_echoed(client):
    r = client.get('/healthz', HTTP_X_REQUEST_ID='abc123')
    assert r['X-Request-ID'] == 'abc123'
    assert len(client.get('/healthz')['X-Request-ID']) == 32


def test_unhandled_errors_are_hidden():
    request = RequestFactory().get('/api/anything')
    resp = api_exception_handler(RuntimeError('secret detail'), {'request': request})
    assert resp.status_code == 500
    assert resp.data['code'] == 'server_error'
    assert 'secret detail' not in resp.data['message']
