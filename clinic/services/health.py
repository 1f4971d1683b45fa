"""
Per-patient health metric history (BMI and blood pressure).

One HealthData row per patient, created on first access.  Entries are
appended oldest first and removed by list index; mutations hold a row
lock so concurrent writes from the same patient serialize.
"""
from __future__ import annotations

import logging
import math

from django.db import transaction
from django.utils import timezone

from clinic.exceptions import IndexOutOfRange, InvalidInput
from clinic.models import HealthData, Patient

logger = logging.getLogger(__name__)

HISTORY_FIELDS = {'bmi': 'bmi_history', 'bp': 'bp_history'}


def _positive_number(value):
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def get_or_create(patient: Patient) -> HealthData:
    record, _ = HealthData.objects.get_or_create(patient=patient)
    return record


def _locked(patient: Patient) -> HealthData:
    get_or_create(patient)
    return HealthData.objects.select_for_update().get(patient=patient)


def _history_field(kind: str) -> str:
    field = HISTORY_FIELDS.get(kind)
    if field is None:
        raise InvalidInput('Invalid data provided')
    return field


def append(patient: Patient, kind: str, data: dict, *, now=None) -> HealthData:
    field = _history_field(kind)
    data = data or {}
    stamp = (now or timezone.now()).isoformat()
    if kind == 'bmi':
        value = _positive_number(data.get('value'))
        if value is None:
            raise InvalidInput('Invalid data provided')
        entry = {'value': value, 'date': stamp}
    else:
        systolic = _positive_number(data.get('systolic'))
        diastolic = _positive_number(data.get('diastolic'))
        if systolic is None or diastolic is None:
            raise InvalidInput('Invalid data provided')
        entry = {'systolic': systolic, 'diastolic': diastolic, 'date': stamp}

    with transaction.atomic():
        record = _locked(patient)
        getattr(record, field).append(entry)
        record.save(update_fields=[field, 'updated_at'])
    return record


def remove_at(patient: Patient, kind: str, index) -> HealthData:
    field = _history_field(kind)
    if isinstance(index, bool):
        raise IndexOutOfRange()
    try:
        index = int(index)
    except (TypeError, ValueError):
        raise IndexOutOfRange()

    with transaction.atomic():
        record = _locked(patient)
        history = getattr(record, field)
        if index < 0 or index >= len(history):
            raise IndexOutOfRange()
        del history[index]
        record.save(update_fields=[field, 'updated_at'])
    logger.info('health entry removed patient=%s kind=%s index=%s', patient.pk, kind, index)
    return record


def format_health_data(record: HealthData) -> dict:
    return {
        'patientId': record.patient_id,
        'bmiHistory': record.bmi_history,
        'bpHistory': record.bp_history,
        'updatedAt': record.updated_at.isoformat() if record.updated_at else None,
    }
