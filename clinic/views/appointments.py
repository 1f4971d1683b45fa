"""
Appointment endpoints.

Patients book and pay; the doctor on an appointment sets its status and
schedules the video meeting.  Either party may read or cancel it.  List
queries are always narrowed to the caller's own appointments.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Appointment, Doctor, Patient
from clinic.permissions import IsAppointmentParty, IsDoctorRole
from clinic.serializers.appointment import (
    AppointmentCreateSerializer,
    AppointmentListQuerySerializer,
    AppointmentPatchSerializer,
    MeetingLinkSerializer,
)
from clinic.services import appointments, doctors


def _party_or_403(request, appt: Appointment) -> Appointment:
    perm = IsAppointmentParty()
    if not perm.has_object_permission(request, None, appt):
        raise PermissionDenied(perm.message)
    return appt


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointment_collection(request):
    user = request.user
    if request.method == 'POST':
        if user.role != Patient.ROLE:
            raise PermissionDenied('Only patients can book appointments')
        s = AppointmentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vd = s.validated_data
        doctor = doctors.get(vd.pop('doctor_id'))
        appt = appointments.book(user, doctor, vd)
        return Response({'success': True, 'data': appointments.format_appointment(appt)},
                        status=status.HTTP_201_CREATED)

    q = AppointmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    filters = dict(q.validated_data)
    own_key = 'patient_id' if user.role == Patient.ROLE else 'doctor_id'
    requested = filters.get(own_key)
    if requested is not None and requested != user.pk:
        raise PermissionDenied('You can only list your own appointments')
    filters[own_key] = user.pk
    qs = appointments.list_for(**filters)
    return Response({'success': True, 'data': [appointments.format_appointment(a) for a in qs]})


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, appointment_id):
    appt = _party_or_403(request, appointments.get(appointment_id))

    if request.method == 'GET':
        return Response({'success': True, 'data': appointments.format_appointment(appt)})

    if request.method == 'DELETE':
        appointments.delete(appt.appointment_id)
        return Response({'success': True, 'data': {}})

    s = AppointmentPatchSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    if 'status' in vd and request.user.role != Doctor.ROLE:
        raise PermissionDenied('Only the doctor can change the appointment status')
    appt = appointments.update(
        appt.appointment_id,
        status=vd.get('status'),
        payment_status=vd.get('payment_status'),
        payment_amount=vd.get('payment_amount'),
    )
    return Response({'success': True, 'data': appointments.format_appointment(appt)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def meeting_link(request):
    s = MeetingLinkSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    _party_or_403(request, appointments.get(vd['appointment_id']))

    outcome = appointments.schedule_meeting(vd['appointment_id'], vd['meeting_link'], vd['meeting_time'])
    appt = outcome.appointment
    data = {
        'appointmentId': appt.appointment_id,
        'meetingTime': appt.meeting_time,
        'meetingLink': appt.meeting_link,
        'patientEmail': appt.patient.email,
        'notified': outcome.notified,
    }
    if outcome.notified:
        return Response({'success': True, 'message': 'Meeting link sent successfully', 'data': data})
    return Response({
        'success': True,
        'message': 'Meeting scheduled but email failed to send',
        'emailError': outcome.error,
        'data': data,
    })
