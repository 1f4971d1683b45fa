import base64
import logging
import os

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone
from django.utils.text import get_valid_filename

from clinic.exceptions import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_AVATAR = '/default-avatar.png'
DOCTOR_PICTURE_MAX_MB = 5


def check_image(f, max_mb) -> str:
    """Validate size and content type of an uploaded file; returns the content type."""
    if f is None:
        raise InvalidInput('No file provided')
    size_mb = (f.size or 0) / (1024 * 1024)
    if size_mb > max_mb:
        raise InvalidInput(f'File size too large (max {max_mb}MB)')
    ctype = getattr(f, 'content_type', '') or ''
    if not any(ctype.startswith(prefix) for prefix in settings.ALLOWED_UPLOAD_TYPES):
        raise InvalidInput('Only image files are allowed')
    return ctype


def as_data_uri(f) -> str:
    """Inline an uploaded image as a ``data:`` URI (patient avatars)."""
    ctype = check_image(f, settings.UPLOAD_MAX_MB)
    encoded = base64.b64encode(f.read()).decode('ascii')
    return f'data:{ctype};base64,{encoded}'


def store_doctor_picture(f) -> str:
    """Write a doctor avatar to media storage and return its public path."""
    check_image(f, DOCTOR_PICTURE_MAX_MB)
    stamp = int(timezone.now().timestamp() * 1000)
    name = get_valid_filename(os.path.basename(f.name or 'picture'))
    saved = default_storage.save(f'doctors/{stamp}-{name}', f)
    logger.info('doctor picture stored at %s', saved)
    return f"{settings.MEDIA_URL.rstrip('/')}/{saved}"
