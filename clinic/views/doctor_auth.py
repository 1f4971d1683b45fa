"""
Doctor registration, two-step login and account recovery.

Login is split in two calls: ``action=validate`` only checks the
password, ``action=login`` re-checks it, cross-checks the BMDC number
against the registry and issues a session.  The token is returned in the
body and also set as an httpOnly cookie for the doctor dashboard.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.models import Doctor
from clinic.permissions import IsDoctorRole
from clinic.serializers.auth import EmailSerializer, OtpResetSerializer, OtpVerifySerializer
from clinic.serializers.doctor import DoctorLoginSerializer, DoctorRegisterSerializer
from clinic.services import credentials, doctors, sessions
from clinic.throttles import LoginRateThrottle, OtpRateThrottle


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def doctor_register(request):
    s = DoctorRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = credentials.register_doctor(s.validated_data, picture=request.FILES.get('profilePicture'))
    return Response({
        'success': True,
        'message': 'Doctor registration successful. Please wait for admin approval.',
        'doctor': {'id': doctor.pk, 'username': doctor.username, 'name': doctor.name, 'email': doctor.email},
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def doctor_login(request):
    s = DoctorLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    doctor = credentials.authenticate_doctor(vd['username'], vd['password'])
    if vd['action'] == 'validate':
        return Response({'success': True, 'message': 'Validation successful. Please provide BMDC number.'})

    credentials.verify_doctor_registration(doctor, vd['bmdc_number'])
    token = sessions.issue(doctor)
    resp = Response({
        'success': True,
        'message': 'Logged in successfully',
        'token': token,
        'doctor': {'id': doctor.pk, 'name': doctor.name},
    })
    resp.set_cookie(
        settings.SESSION_COOKIE_NAME_DOCTOR,
        token,
        max_age=int(settings.DOCTOR_TOKEN_LIFETIME.total_seconds()),
        httponly=True,
        secure=settings.ENV == 'prod',
        samesite='Strict',
        path='/',
    )
    return resp


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def doctor_forgot_password(request):
    s = EmailSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    credentials.mail_one_time_code(Doctor, s.validated_data['email'], 'No doctor account found with that email address')
    return Response({'success': True, 'message': 'OTP sent to your email successfully. Please check your inbox.'})


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def doctor_verify_otp(request):
    s = OtpVerifySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    credentials.verify_one_time_code(Doctor, s.validated_data['email'], s.validated_data['otp'])
    return Response({'success': True, 'message': 'OTP verified successfully. You can now reset your password.'})


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OtpRateThrottle])
def doctor_reset_password_otp(request):
    s = OtpResetSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    credentials.reset_password_with_code(Doctor, vd['email'], vd['otp'], vd['new_password'])
    return Response({'success': True, 'message': 'Password reset successful'})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsDoctorRole])
def doctor_profile_upload(request):
    path = doctors.set_picture(request.user, request.FILES.get('file'))
    return Response({'success': True, 'filePath': path})
