from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from clinic.exceptions import AlreadyReviewed, InvalidInput, InvalidRating, MessageTooLong
from clinic.models import Doctor, Patient, Review, ReviewDoctor
from clinic.text import plain_text

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 500


def _check(rating, message) -> tuple:
    if rating in (None, '') or not message:
        raise InvalidInput('Rating and review message are required')
    try:
        rating = int(rating)
    except (TypeError, ValueError):
        raise InvalidRating()
    if rating < 1 or rating > 5:
        raise InvalidRating()
    # the limit applies to what the author typed
    if len(str(message).strip()) > MAX_MESSAGE_LENGTH:
        raise MessageTooLong()
    message = plain_text(message)
    if not message:
        raise InvalidInput('Rating and review message are required')
    return rating, message


def _create(model, rating, message, **author):
    try:
        with transaction.atomic():
            return model.objects.create(rating=rating, review_message=message, **author)
    except IntegrityError:
        # the one-review-per-author constraint caught a concurrent submit
        raise AlreadyReviewed()


def submit_patient_review(patient: Patient, rating, message) -> Review:
    if Review.objects.filter(patient=patient).exists():
        raise AlreadyReviewed()
    rating, message = _check(rating, message)
    review = _create(Review, rating, message, patient=patient, patient_name=patient.full_name)
    logger.info('review submitted patient=%s rating=%s', patient.pk, rating)
    return review


def submit_doctor_review(doctor: Doctor, rating, message) -> ReviewDoctor:
    if ReviewDoctor.objects.filter(doctor=doctor).exists():
        raise AlreadyReviewed()
    rating, message = _check(rating, message)
    review = _create(ReviewDoctor, rating, message, doctor=doctor, doctor_name=doctor.name)
    logger.info('review submitted doctor=%s rating=%s', doctor.pk, rating)
    return review


def sample(model, n: int = 3):
    """Up to ``n`` reviews picked uniformly at random."""
    return list(model.objects.order_by('?')[:n])


def format_review(review) -> dict:
    if isinstance(review, ReviewDoctor):
        author = {'doctorId': review.doctor_id, 'doctorName': review.doctor_name}
    else:
        author = {'patientId': review.patient_id, 'patientName': review.patient_name}
    return {
        'id': review.pk,
        **author,
        'rating': review.rating,
        'reviewMessage': review.review_message,
        'createdAt': review.created_at.isoformat() if review.created_at else None,
    }
