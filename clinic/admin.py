"""
Django admin registrations for the clinic models.

Password hashes and recovery secrets are read-only here; use the
recovery flows or ``ensure_test_users`` to change a password.
"""
from django.contrib import admin

from .models import Appointment, BmdcDoctor, Doctor, HealthData, Patient, Prescription, Review, ReviewDoctor

SECRET_FIELDS = ('password', 'otp_code', 'otp_expire')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('username', 'full_name', 'email', 'is_email_verified', 'created_at')
    search_fields = ('username', 'full_name', 'email', 'national_id')
    readonly_fields = SECRET_FIELDS + ('reset_password_token', 'reset_password_expire', 'google_id')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('username', 'name', 'speciality', 'bmdc_number', 'is_registered')
    list_filter = ('is_registered', 'speciality')
    search_fields = ('username', 'name', 'email', 'bmdc_number')
    readonly_fields = SECRET_FIELDS


@admin.register(BmdcDoctor)
class BmdcDoctorAdmin(admin.ModelAdmin):
    list_display = ('name', 'bmdc')
    search_fields = ('name', 'bmdc')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('appointment_id', 'patient_name', 'doctor_name', 'appointment_date',
                    'status', 'payment_status', 'meeting_scheduled', 'meeting_email_sent')
    list_filter = ('status', 'payment_status', 'meeting_scheduled')
    search_fields = ('appointment_id', 'patient_name', 'doctor_name')


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ('prescription_id', 'patient_name', 'doctor_name', 'prescription_date')
    search_fields = ('prescription_id', 'patient_name', 'doctor_name')


@admin.register(HealthData)
class HealthDataAdmin(admin.ModelAdmin):
    list_display = ('patient', 'updated_at')


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('patient_name', 'rating', 'created_at')


@admin.register(ReviewDoctor)
class ReviewDoctorAdmin(admin.ModelAdmin):
    list_display = ('doctor_name', 'rating', 'created_at')
