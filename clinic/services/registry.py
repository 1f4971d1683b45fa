import logging

from django.db import transaction

from clinic.models import BmdcDoctor

logger = logging.getLogger(__name__)

REFERENCE_DOCTORS = [
    ('Dr. Evelyn Reed', '93481'),
    ('Dr. Marcus Thorne', '58204'),
    ('Dr. Elena Vance', '74152'),
    ('Dr. Julian Croft', '30967'),
    ('Dr. Clara Monroe', '65833'),
]


@transaction.atomic
def reset_registry() -> int:
    """Replace the registry with the reference doctors; returns the row count."""
    BmdcDoctor.objects.all().delete()
    BmdcDoctor.objects.bulk_create(BmdcDoctor(name=name, bmdc=bmdc) for name, bmdc in REFERENCE_DOCTORS)
    logger.info('bmdc registry reset with %d entries', len(REFERENCE_DOCTORS))
    return len(REFERENCE_DOCTORS)
