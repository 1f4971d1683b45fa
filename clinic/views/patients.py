from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Appointment, Patient
from clinic.services import patients


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_detail(request, patient_id):
    """A patient record, visible to the patient and to doctors they have booked."""
    patient = patients.get(patient_id)
    user = request.user
    if user.role == Patient.ROLE:
        allowed = user.pk == patient.pk
    else:
        allowed = Appointment.objects.filter(patient=patient, doctor_id=user.pk).exists()
    if not allowed:
        raise PermissionDenied('forbidden for this patient')
    return Response({'success': True, 'data': patients.format_patient(patient)})
