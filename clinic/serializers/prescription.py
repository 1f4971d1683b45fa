from rest_framework import serializers

from clinic.text import plain_text


class MedicationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    dosage = serializers.CharField(max_length=128)
    frequency = serializers.CharField(max_length=128)
    duration = serializers.CharField(max_length=128)
    instructions = serializers.CharField(required=False, allow_blank=True, default='')


class PrescriptionCreateSerializer(serializers.Serializer):
    appointmentId = serializers.CharField(source='appointment_id')
    diagnosis = serializers.CharField()
    chiefComplaint = serializers.CharField(source='chief_complaint')
    medications = MedicationSerializer(many=True)
    generalInstructions = serializers.CharField(source='general_instructions', required=False, allow_blank=True)
    nextVisitDate = serializers.CharField(source='next_visit_date', required=False, allow_blank=True)

    def validate_diagnosis(self, v):
        return plain_text(v)

    def validate_chiefComplaint(self, v):
        return plain_text(v)

    def validate_generalInstructions(self, v):
        return plain_text(v)


class PrescriptionQuerySerializer(serializers.Serializer):
    appointmentId = serializers.CharField(source='appointment_id', required=False)
    prescriptionId = serializers.CharField(source='prescription_id', required=False)
