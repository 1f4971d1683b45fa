"""
ASGI config for the TreatWell project.

Only plain HTTP is served; there are no WebSocket routes.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "treatwell.settings")

application = get_asgi_application()
