from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Doctor
from clinic.permissions import IsAppointmentParty
from clinic.serializers.prescription import PrescriptionCreateSerializer, PrescriptionQuerySerializer
from clinic.services import appointments, prescriptions


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def prescription_collection(request):
    party = IsAppointmentParty()
    if request.method == 'GET':
        q = PrescriptionQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        rx = prescriptions.lookup(**q.validated_data)
        if not party.has_object_permission(request, None, rx):
            raise PermissionDenied('You are not a party to this prescription')
        return Response({'success': True, 'data': prescriptions.format_prescription(rx)})

    if request.user.role != Doctor.ROLE:
        raise PermissionDenied('Only doctors can write prescriptions')
    s = PrescriptionCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    appt = appointments.get(vd.pop('appointment_id'))
    if not party.has_object_permission(request, None, appt):
        raise PermissionDenied(party.message)
    rx = prescriptions.issue(appt, vd)
    return Response({'success': True, 'data': prescriptions.format_prescription(rx)},
                    status=status.HTTP_201_CREATED)
