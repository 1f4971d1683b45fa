"""
Role based permission classes.

``request.user`` is either a Patient or a Doctor (see
``clinic.authentication``); each exposes a ``role`` attribute.
"""
from rest_framework.permissions import BasePermission


class IsPatientRole(BasePermission):
    """Allow access only to authenticated patients."""
    message = 'Patient login required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "patient")


class IsDoctorRole(BasePermission):
    """Allow access only to authenticated doctors."""
    message = 'Doctor login required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "doctor")


class IsAppointmentParty(BasePermission):
    """The patient or doctor named on the appointment (expects ``obj.patient_id``/``obj.doctor_id``)."""
    message = 'You are not a party to this appointment'

    def has_object_permission(self, request, view, obj) -> bool:
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if user.role == "patient":
            return obj.patient_id == user.pk
        if user.role == "doctor":
            return obj.doctor_id == user.pk
        return False
