"""
URL mappings for the TreatWell API.

Paths follow the web client's routes and deliberately omit trailing
slashes.  ``meeting-link`` is listed before the appointment detail route
so it is not captured as an appointment id.
"""
from django.urls import include, path

from .views import appointments, doctors, health, health_data, patients, prescriptions, registry, reviews, stats
from .views import auth, doctor_auth

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),

    # Patient authentication
    path('api/auth/register', auth.register, name='register'),
    path('api/auth/login', auth.login, name='login'),
    path('api/auth/profile', auth.profile, name='profile'),
    path('api/auth/profile/upload', auth.profile_upload, name='profile_upload'),
    path('api/auth/forgot-password', auth.forgot_password, name='forgot_password'),
    path('api/auth/reset-password/<str:token>', auth.reset_password, name='reset_password'),
    path('api/auth/forgot-password-otp', auth.forgot_password_otp, name='forgot_password_otp'),
    path('api/auth/verify-otp', auth.verify_otp, name='verify_otp'),
    path('api/auth/reset-password-otp', auth.reset_password_otp, name='reset_password_otp'),
    path('api/auth/google', auth.google_login, name='google_login'),

    # Doctor authentication
    path('api/auth/doctor/register', doctor_auth.doctor_register, name='doctor_register'),
    path('api/auth/doctor-login', doctor_auth.doctor_login, name='doctor_login'),
    path('api/auth/doctor/forgot-password', doctor_auth.doctor_forgot_password, name='doctor_forgot_password'),
    path('api/auth/doctor/verify-otp', doctor_auth.doctor_verify_otp, name='doctor_verify_otp'),
    path('api/auth/doctor/reset-password-otp', doctor_auth.doctor_reset_password_otp,
         name='doctor_reset_password_otp'),
    path('api/auth/doctor/profile/upload', doctor_auth.doctor_profile_upload, name='doctor_profile_upload'),

    # Directory
    path('api/doctors', doctors.doctor_list, name='doctor_list'),
    path('api/doctors/specialities', doctors.speciality_list, name='speciality_list'),
    path('api/doctors/<int:doctor_id>', doctors.doctor_detail, name='doctor_detail'),
    path('api/patients/<int:patient_id>', patients.patient_detail, name='patient_detail'),

    # Appointments & prescriptions
    path('api/appointments', appointments.appointment_collection, name='appointments'),
    path('api/appointments/meeting-link', appointments.meeting_link, name='meeting_link'),
    path('api/appointments/<str:appointment_id>', appointments.appointment_detail, name='appointment_detail'),
    path('api/prescriptions', prescriptions.prescription_collection, name='prescriptions'),

    # Ancillary records
    path('api/health-data', health_data.health_data, name='health_data'),
    path('api/reviews', reviews.patient_reviews, name='reviews'),
    path('api/reviews-doctor', reviews.doctor_reviews, name='reviews_doctor'),
    path('api/stats', stats.platform_stats, name='stats'),

    # Operations
    path('api/seed-bmdc', registry.seed_bmdc, name='seed_bmdc'),
]
