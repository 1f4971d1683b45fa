"""
Import order checks.

Each case starts a fresh interpreter, so the modules load cold in the
given order the way a worker process would load them.
"""
import os
import subprocess
import sys

import pytest
from django.conf import settings

SETUP = "import django; django.setup(); "


@pytest.mark.parametrize('statements', [
    'import clinic.exceptions; from rest_framework.views import APIView; APIView().get_authenticators()',
    'import clinic.authentication; import clinic.handlers',
    'from rest_framework.views import APIView; import clinic.exceptions; APIView().get_authenticators()',
    'from rest_framework.settings import api_settings; api_settings.EXCEPTION_HANDLER; '
    'api_settings.DEFAULT_AUTHENTICATION_CLASSES',
    'import treatwell.urls',
])
def test_modules_load_in_a_fresh_interpreter(statements):
    result = subprocess.run(
        [sys.executable, '-c', SETUP + statements],
        cwd=settings.BASE_DIR,
        env={**os.environ, 'DJANGO_SETTINGS_MODULE': 'treatwell.settings'},
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
