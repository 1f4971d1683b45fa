from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsPatientRole
from clinic.serializers.health import HealthDataAppendSerializer, HealthDataRemoveSerializer
from clinic.services import health


@api_view(['GET', 'POST', 'DELETE'])
@permission_classes([IsAuthenticated, IsPatientRole])
def health_data(request):
    """Patient's own BMI / blood pressure history.

    POST ``{type, data}`` appends an entry, DELETE ``{type, index}`` removes one.
    """
    patient = request.user
    if request.method == 'GET':
        record = health.get_or_create(patient)
    elif request.method == 'POST':
        s = HealthDataAppendSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        record = health.append(patient, s.validated_data['type'], s.validated_data['data'])
    else:
        s = HealthDataRemoveSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        record = health.remove_at(patient, s.validated_data['type'], s.validated_data['index'])
    return Response({'success': True, 'data': health.format_health_data(record)})
