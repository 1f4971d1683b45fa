from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.models import Doctor
from clinic.serializers.doctor import DoctorListQuerySerializer, DoctorUpdateSerializer
from clinic.services import doctors


@api_view(['GET'])
@permission_classes([AllowAny])
def doctor_list(request):
    """Doctor directory; seeds demo doctors the first time it is empty."""
    q = DoctorListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = doctors.list_doctors(q.validated_data.get('speciality'))
    return Response({'success': True, 'data': [doctors.format_doctor(d) for d in qs]})


@api_view(['GET'])
@permission_classes([AllowAny])
def speciality_list(request):
    return Response({'success': True, 'data': doctors.specialities()})


@api_view(['GET', 'PUT'])
@permission_classes([AllowAny])
def doctor_detail(request, doctor_id):
    doctor = doctors.get(doctor_id)
    if request.method == 'PUT':
        user = request.user
        if not (user and user.is_authenticated):
            raise NotAuthenticated()
        if user.role != Doctor.ROLE or user.pk != doctor.pk:
            raise PermissionDenied('You can only update your own profile')
        s = DoctorUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        doctor = doctors.update_profile(doctor, s.validated_data)
    return Response({'success': True, 'data': doctors.format_doctor(doctor)})
