from rest_framework import serializers

from clinic.models import Appointment


class AppointmentCreateSerializer(serializers.Serializer):
    doctorId = serializers.IntegerField(source='doctor_id')
    appointmentDate = serializers.CharField(source='appointment_date', max_length=32)
    appointmentDay = serializers.CharField(source='appointment_day', max_length=16)
    appointmentTime = serializers.CharField(source='appointment_time', max_length=32)
    doctorInfo = serializers.CharField(source='doctor_info', required=False, allow_blank=True)


class AppointmentListQuerySerializer(serializers.Serializer):
    patientId = serializers.IntegerField(source='patient_id', required=False)
    doctorId = serializers.IntegerField(source='doctor_id', required=False)
    status = serializers.ChoiceField(choices=[c[0] for c in Appointment.STATUS_CHOICES], required=False)


class AppointmentPatchSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in Appointment.STATUS_CHOICES], required=False)
    paymentStatus = serializers.ChoiceField(
        source='payment_status', choices=[c[0] for c in Appointment.PAYMENT_CHOICES], required=False)
    paymentAmount = serializers.DecimalField(
        source='payment_amount', max_digits=10, decimal_places=2, min_value=0, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide status, paymentStatus or paymentAmount')
        return attrs


class MeetingLinkSerializer(serializers.Serializer):
    appointmentId = serializers.CharField(source='appointment_id')
    meetingTime = serializers.CharField(source='meeting_time', max_length=64)
    meetingLink = serializers.URLField(source='meeting_link', max_length=512)
