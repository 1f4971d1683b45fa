"""
Domain errors.

Each one carries its HTTP status and a ``default_code`` that
``clinic.handlers.api_exception_handler`` returns as the error ``code``.
This module must not import ``rest_framework.views`` (see ``clinic.handlers``).
"""
from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed


class DuplicateIdentity(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'An account already exists with these details'
    default_code = 'DuplicateIdentity'


class InvalidCredentials(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid credentials'
    default_code = 'InvalidCredentials'


class InvalidOrExpiredCode(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid or expired OTP code'
    default_code = 'InvalidOrExpiredCode'


class WeakPassword(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Password must be at least 6 characters long'
    default_code = 'WeakPassword'


class RegistryVerificationFailed(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'BMDC verification failed. Please contact admin.'
    default_code = 'RegistryVerificationFailed'


class InvalidToken(AuthenticationFailed):
    default_detail = 'Invalid token'
    default_code = 'InvalidToken'


class ExpiredToken(AuthenticationFailed):
    default_detail = 'Token has expired'
    default_code = 'ExpiredToken'


class AccountConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This email is already registered. Please use your regular login credentials.'
    default_code = 'AccountConflict'


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'NotFound'


class InvalidInput(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid data provided'
    default_code = 'InvalidInput'


class IndexOutOfRange(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid delete request'
    default_code = 'InvalidDeleteRequest'


class AlreadyReviewed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'You have already submitted a review'
    default_code = 'AlreadyReviewed'


class InvalidRating(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Rating must be between 1 and 5'
    default_code = 'InvalidRating'


class MessageTooLong(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Review message must be less than 500 characters'
    default_code = 'MessageTooLong'


class MailDeliveryFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Email could not be sent. Please try again.'
    default_code = 'MailDeliveryFailed'


class ServiceDisabled(APIException):
    status_code = status.HTTP_501_NOT_IMPLEMENTED
    default_detail = 'This service is not enabled on the server'
    default_code = 'ServiceDisabled'

