from datetime import timedelta

import jwt
import pytest
from django.conf import settings
from django.utils import timezone

from clinic.exceptions import ExpiredToken, InvalidToken
from clinic.services import sessions

pytestmark = pytest.mark.django_db


def test_round_trip_patient(patient):
    claims = sessions.validate(sessions.issue(patient))
    assert claims.id == patient.pk
    assert claims.role == 'patient'
    assert claims.expires_at - claims.issued_at == timedelta(days=30)
    assert sessions.resolve(claims) == patient


def test_doctor_tokens_are_short_lived(doctor):
    claims = sessions.validate(sessions.issue(doctor))
    assert claims.role == 'doctor'
    assert claims.expires_at - claims.issued_at == timedelta(hours=1)


def test_expired_token(doctor):
    token = sessions.issue(doctor, now=timezone.now() - timedelta(hours=2))
    with pytest.raises(ExpiredToken):
        sessions.validate(token)


def test_tampered_token(patient):
    token = sessions.issue(patient)
    payload = jwt.decode(token, options={'verify_signature': False})
    forged = jwt.encode(payload, 'a-completely-different-signing-secret', algorithm='HS256')
    with pytest.raises(InvalidToken):
        sessions.validate(forged)


@pytest.mark.parametrize('payload', [
    {'id': 1, 'role': 'admin'},
    {'id': '1', 'role': 'patient'},
    {'id': True, 'role': 'patient'},
])
def test_malformed_payload(payload):
    now = int(timezone.now().timestamp())
    token = jwt.encode({**payload, 'iat': now, 'exp': now + 60}, settings.JWT_SECRET, algorithm='HS256')
    with pytest.raises(InvalidToken):
        sessions.validate(token)


def test_deleted_account(patient):
    claims = sessions.validate(sessions.issue(patient))
    patient.delete()
    with pytest.raises(InvalidToken):
        sessions.resolve(claims)


class TestBearerAuthentication:
    url = '/api/auth/profile'

    def test_missing_token(self, api_client):
        r = api_client.get(self.url)
        assert r.status_code == 401
        assert r.json()['success'] is False

    def test_expired_token(self, api_client, patient):
        token = sessions.issue(patient, now=timezone.now() - timedelta(days=31))
        r = api_client.get(self.url, HTTP_AUTHORIZATION=f'Bearer {token}')
        assert r.status_code == 401
        assert r.json()['code'] == 'ExpiredToken'

    def test_garbage_token(self, api_client):
        r = api_client.get(self.url, HTTP_AUTHORIZATION='Bearer not.a.jwt')
        assert r.status_code == 401
        assert r.json()['code'] == 'InvalidToken'

    def test_doctor_token_on_patient_endpoint(self, client_for, doctor):
        r = client_for(doctor).get(self.url)
        assert r.status_code == 403

    def test_doctor_cookie(self, api_client, doctor):
        api_client.cookies['token'] = sessions.issue(doctor)
        r = api_client.get('/api/appointments')
        assert r.status_code == 200
        assert r.json() == {'success': True, 'data': []}
