"""TreatWell clinic app: patients, doctors, appointments and related records."""
