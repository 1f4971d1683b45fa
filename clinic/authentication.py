"""
Bearer token authentication for DRF.

The token is read from ``Authorization: Bearer <token>``; doctor browser
sessions may instead carry it in the httpOnly ``token`` cookie set at
login.  A valid token resolves to the Patient or Doctor row, which DRF
then exposes to views as ``request.user`` with the decoded claims on
``request.auth``.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework import authentication

from clinic.exceptions import InvalidToken
from clinic.services import sessions


class BearerTokenAuthentication(authentication.BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        raw = self._token_from_header(request)
        if raw is None:
            raw = request.COOKIES.get(settings.SESSION_COOKIE_NAME_DOCTOR)
        if not raw:
            return None
        claims = sessions.validate(raw)
        return sessions.resolve(claims), claims

    def _token_from_header(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None
        if len(header) != 2:
            raise InvalidToken('Invalid token header')
        try:
            return header[1].decode()
        except UnicodeError:
            raise InvalidToken('Invalid token header')

    def authenticate_header(self, request):
        return self.keyword
