"""
Database models for the TreatWell backend.

Patients and doctors are stored as their own identity records rather
than as Django auth users: each carries its own password hash and the
one-time code / reset token state used by the recovery flows.  Nested
structures that the web client treats as embedded documents (metric
histories, medication line items) are kept as ordered JSON lists.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.hashers import check_password, make_password
from django.db import models


class Identity(models.Model):
    """Fields and behaviour shared by patients and doctors."""

    ROLE: str = ''

    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128, blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True)
    profile_picture = models.TextField(blank=True, null=True)
    otp_code = models.CharField(max_length=8, blank=True, null=True)
    otp_expire = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    # DRF treats whatever the authentication class returns as request.user
    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def role(self) -> str:
        return self.ROLE

    def set_password(self, raw_password: str) -> None:
        self.password = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        if not self.password:
            return False
        return check_password(raw_password, self.password)

    def clear_otp(self) -> None:
        self.otp_code = None
        self.otp_expire = None


class Patient(Identity):
    ROLE = 'patient'

    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
        ('not-specified', 'Not specified'),
    ]

    full_name = models.CharField(max_length=255)
    google_id = models.CharField(max_length=64, unique=True, blank=True, null=True)
    is_email_verified = models.BooleanField(default=False)
    reset_password_token = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    reset_password_expire = models.DateTimeField(blank=True, null=True)
    gender = models.CharField(max_length=16, choices=GENDER_CHOICES)
    dob = models.DateField()
    national_id = models.CharField(max_length=64, unique=True)
    address = models.CharField(max_length=255)

    def __str__(self) -> str:
        return f"{self.username} ({self.full_name})"

    def clear_reset_token(self) -> None:
        self.reset_password_token = None
        self.reset_password_expire = None


class Doctor(Identity):
    ROLE = 'doctor'

    name = models.CharField(max_length=255)
    gender = models.CharField(max_length=16, blank=True)
    bmdc_number = models.CharField(max_length=32, unique=True, blank=True, null=True)
    speciality = models.CharField(max_length=128, db_index=True)
    location = models.CharField(max_length=255)
    designation = models.CharField(max_length=255)
    qualification = models.CharField(max_length=255)
    about = models.TextField()
    is_registered = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.name} ({self.speciality})"


class BmdcDoctor(models.Model):
    """Reference copy of the medical council registry."""
    name = models.CharField(max_length=255)
    bmdc = models.CharField(max_length=32, unique=True)

    class Meta:
        indexes = [models.Index(fields=['name', 'bmdc'])]

    def __str__(self) -> str:
        return f"{self.name} ({self.bmdc})"


def new_appointment_id() -> str:
    return str(uuid.uuid4())


class Appointment(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_DONE = 'Done'
    STATUS_DECLINED = 'Declined'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_DONE, 'Done'),
        (STATUS_DECLINED, 'Declined'),
    )

    PAYMENT_PAID = 'paid'
    PAYMENT_UNPAID = 'unpaid'
    PAYMENT_CHOICES = ((PAYMENT_PAID, 'paid'), (PAYMENT_UNPAID, 'unpaid'))

    appointment_id = models.CharField(max_length=36, unique=True, default=new_appointment_id, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    patient_name = models.CharField(max_length=255)
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='appointments')
    doctor_name = models.CharField(max_length=255)
    speciality = models.CharField(max_length=128)
    doctor_info = models.TextField(blank=True)
    location = models.CharField(max_length=255)
    designation = models.CharField(max_length=255)
    qualification = models.CharField(max_length=255)
    appointment_date = models.CharField(max_length=32)
    appointment_day = models.CharField(max_length=16)
    appointment_time = models.CharField(max_length=32)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    payment_status = models.CharField(max_length=8, choices=PAYMENT_CHOICES, default=PAYMENT_UNPAID)
    payment_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    payment_date = models.DateTimeField(blank=True, null=True)
    meeting_link = models.CharField(max_length=512, blank=True, default='')
    meeting_time = models.CharField(max_length=64, blank=True, default='')
    meeting_scheduled = models.BooleanField(default=False)
    meeting_email_sent = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'created_at']),
            models.Index(fields=['doctor', 'created_at']),
        ]

    def __str__(self) -> str:
        return f"{self.appointment_id}: {self.patient_name} -> {self.doctor_name} ({self.status})"


class Prescription(models.Model):
    prescription_id = models.CharField(max_length=16, unique=True)
    appointment = models.ForeignKey(Appointment, on_delete=models.CASCADE, related_name='prescriptions')
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='prescriptions')
    patient_name = models.CharField(max_length=255)
    patient_age = models.PositiveIntegerField()
    patient_gender = models.CharField(max_length=16)
    patient_phone = models.CharField(max_length=32)
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='prescriptions')
    doctor_name = models.CharField(max_length=255)
    doctor_speciality = models.CharField(max_length=128)
    doctor_qualification = models.CharField(max_length=255)
    doctor_designation = models.CharField(max_length=255)
    diagnosis = models.TextField()
    chief_complaint = models.TextField()
    # [{name, dosage, frequency, duration, instructions}] in prescribed order
    medications = models.JSONField(default=list, blank=True)
    general_instructions = models.TextField(blank=True, default='')
    next_visit_date = models.CharField(max_length=32, blank=True, default='')
    prescription_date = models.CharField(max_length=10)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.prescription_id} for {self.patient_name}"


class HealthData(models.Model):
    patient = models.OneToOneField(Patient, on_delete=models.CASCADE, related_name='health_data')
    # [{value, date}] oldest first
    bmi_history = models.JSONField(default=list, blank=True)
    # [{systolic, diastolic, date}] oldest first
    bp_history = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"HealthData(p={self.patient_id}) bmi={len(self.bmi_history)} bp={len(self.bp_history)}"


class Review(models.Model):
    """A patient's review of the platform; one per patient."""
    patient = models.OneToOneField(Patient, on_delete=models.CASCADE, related_name='review')
    patient_name = models.CharField(max_length=255)
    rating = models.PositiveSmallIntegerField()
    review_message = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.patient_name}: {self.rating}"


class ReviewDoctor(models.Model):
    """A doctor's review of the platform; one per doctor."""
    doctor = models.OneToOneField(Doctor, on_delete=models.CASCADE, related_name='review')
    doctor_name = models.CharField(max_length=255)
    rating = models.PositiveSmallIntegerField()
    review_message = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.doctor_name}: {self.rating}"
