from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.services import stats


@api_view(['GET'])
@permission_classes([AllowAny])
def platform_stats(request):
    return Response({'success': True, 'data': stats.cached_counts()})
