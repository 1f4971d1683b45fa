"""
Rate limits for the credential endpoints.

``@api_view`` functions cannot carry a ``throttle_scope`` attribute, so
each scope gets its own throttle class applied with ``@throttle_classes``.
Rates live in ``REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']``.
"""
from rest_framework.throttling import AnonRateThrottle


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


class OtpRateThrottle(AnonRateThrottle):
    scope = 'otp'
