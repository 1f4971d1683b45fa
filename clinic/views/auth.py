"""
Patient authentication and account endpoints.

Registration and login hand back a bearer token; the recovery flows
(reset link and one-time code) mail a secret and later consume it.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.models import Patient
from clinic.permissions import IsPatientRole
from clinic.serializers.auth import (
    EmailSerializer,
    GoogleCodeSerializer,
    LoginSerializer,
    NewPasswordSerializer,
    OtpResetSerializer,
    OtpVerifySerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
)
from clinic.services import credentials, google, patients, sessions
from clinic.throttles import LoginRateThrottle, OtpRateThrottle


def _session_payload(patient: Patient) -> dict:
    return {
        'success': True,
        'token': sessions.issue(patient),
        'patient': patients.format_patient(patient, summary=True),
    }


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def register(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = credentials.register_patient(s.validated_data)
    return Response(_session_payload(patient), status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = credentials.authenticate_patient(s.validated_data['username'], s.validated_data['password'])
    return Response(_session_payload(patient))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsPatientRole])
def profile(request):
    patient = request.user
    if request.method == 'PUT':
        s = ProfileUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        patient = patients.update_profile(patient, s.validated_data)
    return Response({'success': True, 'data': patients.format_patient(patient)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsPatientRole])
def profile_upload(request):
    path = patients.set_picture(request.user, request.FILES.get('file'))
    return Response({'success': True, 'filePath': path})


# ---------------------------------------------------------------------
# Reset by emailed link
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def forgot_password(request):
    s = EmailSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    credentials.mail_reset_link(s.validated_data['email'])
    return Response({'success': True, 'message': 'Password reset email sent successfully. Please check your inbox.'})


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def reset_password(request, token):
    s = NewPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    credentials.reset_password_with_token(token, s.validated_data['new_password'])
    return Response({'success': True, 'message': 'Password reset successful'})


# ---------------------------------------------------------------------
# Reset by one-time code
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def forgot_password_otp(request):
    s = EmailSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    credentials.mail_one_time_code(Patient, s.validated_data['email'], 'No account found with that email address')
    return Response({'success': True, 'message': 'OTP sent to your email successfully. Please check your inbox.'})


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def verify_otp(request):
    s = OtpVerifySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = credentials.verify_one_time_code(Patient, s.validated_data['email'], s.validated_data['otp'])
    return Response({'success': True, 'message': 'OTP verified successfully', 'patientId': patient.pk})


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def reset_password_otp(request):
    s = OtpResetSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    credentials.reset_password_with_code(Patient, vd['email'], vd['otp'], vd['new_password'])
    return Response({'success': True, 'message': 'Password reset successful'})


# ---------------------------------------------------------------------
# Google sign-in
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def google_login(request):
    s = GoogleCodeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    verified = google.exchange_code(s.validated_data['code'])
    patient, is_new = google.bind_or_create_patient(verified)
    payload = _session_payload(patient)
    payload['isNew'] = is_new
    return Response(payload)
