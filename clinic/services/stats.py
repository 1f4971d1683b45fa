from django.conf import settings
from django.core.cache import cache

from clinic.models import Appointment, Doctor, Patient

CACHE_KEY = 'stats:totals'


def counts() -> dict:
    return {
        'totalAppointments': Appointment.objects.count(),
        'totalDoctors': Doctor.objects.count(),
        'totalPatients': Patient.objects.count(),
    }


def cached_counts() -> dict:
    data = cache.get(CACHE_KEY)
    if data is None:
        data = counts()
        cache.set(CACHE_KEY, data, settings.STATS_CACHE_SECONDS)
    return data
