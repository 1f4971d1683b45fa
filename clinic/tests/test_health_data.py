import pytest

from clinic.exceptions import InvalidInput
from clinic.services import health

pytestmark = pytest.mark.django_db

URL = '/api/health-data'


def test_first_read_creates_empty_record(client_for, patient):
    r = client_for(patient).get(URL)
    assert r.status_code == 200
    data = r.json()['data']
    assert data['bmiHistory'] == [] and data['bpHistory'] == []


def test_append_keeps_order(client_for, patient):
    c = client_for(patient)
    c.post(URL, {'type': 'bmi', 'data': {'value': 22.5}}, format='json')
    r = c.post(URL, {'type': 'bmi', 'data': {'value': '23'}}, format='json')
    assert [e['value'] for e in r.json()['data']['bmiHistory']] == [22.5, 23]

    r = c.post(URL, {'type': 'bp', 'data': {'systolic': 120, 'diastolic': 80}}, format='json')
    entry = r.json()['data']['bpHistory'][0]
    assert (entry['systolic'], entry['diastolic']) == (120, 80)
    assert entry['date']


@pytest.mark.parametrize('kind, data', [
    ('bmi', {}),
    ('bmi', {'value': -1}),
    ('bmi', {'value': 'tall'}),
    ('bp', {'systolic': 120}),
    ('bp', {'systolic': True, 'diastolic': 80}),
    ('bmi', {'value': 'inf'}),
    ('bmi', {'value': float('inf')}),
    ('bmi', {'value': 'nan'}),
    ('bp', {'systolic': 10 ** 400, 'diastolic': 80}),
])
def test_append_rejects_bad_values(patient, kind, data):
    with pytest.raises(InvalidInput):
        health.append(patient, kind, data)
    assert health.get_or_create(patient).bmi_history == []


def test_delete_out_of_range_leaves_history(client_for, patient):
    for value in (20, 21, 22):
        health.append(patient, 'bmi', {'value': value})
    r = client_for(patient).delete(URL, {'type': 'bmi', 'index': 5}, format='json')
    assert r.status_code == 400
    assert r.json()['code'] == 'InvalidDeleteRequest'
    assert [e['value'] for e in health.get_or_create(patient).bmi_history] == [20, 21, 22]


def test_delete_by_index(client_for, patient):
    for value in (20, 21, 22):
        health.append(patient, 'bmi', {'value': value})
    r = client_for(patient).delete(URL, {'type': 'bmi', 'index': 1}, format='json')
    assert r.status_code == 200
    assert [e['value'] for e in r.json()['data']['bmiHistory']] == [20, 22]


def test_negative_index(client_for, patient):
    health.append(patient, 'bp', {'systolic': 120, 'diastolic': 80})
    r = client_for(patient).delete(URL, {'type': 'bp', 'index': -1}, format='json')
    assert r.status_code == 400


def test_doctors_have_no_health_record(client_for, doctor):
    assert client_for(doctor).get(URL).status_code == 403


def test_overflowing_json_number_is_rejected(client_for, patient):
    r = client_for(patient).post(
        URL, data='{"type": "bmi", "data": {"value": 1e999}}', content_type='application/json')
    assert r.status_code == 400
    assert r.json()['code'] == 'InvalidInput'
    assert health.get_or_create(patient).bmi_history == []
