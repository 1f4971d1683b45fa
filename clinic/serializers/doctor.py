from rest_framework import serializers

from clinic.text import plain_text


class DoctorRegisterSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=150)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False, write_only=True)
    gender = serializers.CharField(max_length=16, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32)
    bmdcNumber = serializers.CharField(source='bmdc_number', max_length=32)
    speciality = serializers.CharField(max_length=128)
    location = serializers.CharField(max_length=255)
    designation = serializers.CharField(max_length=255)
    qualification = serializers.CharField(max_length=255)
    about = serializers.CharField()

    def validate_name(self, v):
        return plain_text(v)

    def validate_about(self, v):
        return plain_text(v)


class DoctorLoginSerializer(serializers.Serializer):
    ACTIONS = ('validate', 'login')

    action = serializers.ChoiceField(choices=ACTIONS)
    username = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)
    bmdcNumber = serializers.CharField(source='bmdc_number', required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs['action'] == 'login' and not attrs.get('bmdc_number'):
            raise serializers.ValidationError({'bmdcNumber': 'BMDC number is required for login'})
        return attrs


class DoctorUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    username = serializers.CharField(min_length=3, max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    gender = serializers.CharField(max_length=16, required=False, allow_blank=True)
    speciality = serializers.CharField(max_length=128, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    designation = serializers.CharField(max_length=255, required=False, allow_blank=True)
    qualification = serializers.CharField(max_length=255, required=False, allow_blank=True)
    about = serializers.CharField(required=False, allow_blank=True)


class DoctorListQuerySerializer(serializers.Serializer):
    speciality = serializers.CharField(required=False, allow_blank=True)
