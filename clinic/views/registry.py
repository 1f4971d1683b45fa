from django.conf import settings
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.exceptions import ServiceDisabled
from clinic.services import registry


@api_view(['POST'])
@permission_classes([AllowAny])
def seed_bmdc(request):
    if not settings.REGISTRY_SEED_ENABLE:
        raise ServiceDisabled('Registry seeding is disabled on this server')
    n = registry.reset_registry()
    return Response({'success': True, 'message': f'Successfully seeded the BMDC registry with {n} entries.'})
