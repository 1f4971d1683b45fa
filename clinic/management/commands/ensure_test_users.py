# clinic/management/commands/ensure_test_users.py
from datetime import date

from django.core.management.base import BaseCommand

from clinic.models import BmdcDoctor, Doctor, Patient

PASSWORD = "123456"

TEST_PATIENT = {
    "username": "patient1",
    "full_name": "Test Patient",
    "email": "patient1@example.com",
    "gender": "Other",
    "dob": date(1990, 1, 1),
    "national_id": "TEST-0001",
    "phone": "01700000000",
    "address": "Dhaka",
}

TEST_DOCTOR = {
    "username": "doctor1",
    "name": "Dr. Evelyn Reed",
    "email": "doctor1@example.com",
    "gender": "Female",
    "phone": "01800000000",
    "bmdc_number": "93481",
    "speciality": "Cardiology",
    "location": "Dhaka",
    "designation": "Consultant",
    "qualification": "MBBS, FCPS",
    "about": "Test doctor account.",
}


class Command(BaseCommand):
    help = "Ensure a test patient and a verified test doctor exist with password=123456 (idempotent)."

    def handle(self, *args, **opts):
        patient, created = Patient.objects.get_or_create(
            username=TEST_PATIENT["username"], defaults=TEST_PATIENT)
        patient.set_password(PASSWORD)
        patient.save(update_fields=["password"])
        self.stdout.write(self.style.SUCCESS(f"ok: {patient.username} (patient{', created' if created else ''})"))

        BmdcDoctor.objects.get_or_create(
            bmdc=TEST_DOCTOR["bmdc_number"], defaults={"name": TEST_DOCTOR["name"]})
        doctor, created = Doctor.objects.get_or_create(
            username=TEST_DOCTOR["username"], defaults=TEST_DOCTOR)
        doctor.set_password(PASSWORD)
        doctor.save(update_fields=["password"])
        self.stdout.write(self.style.SUCCESS(f"ok: {doctor.username} (doctor{', created' if created else ''})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
