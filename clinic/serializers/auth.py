from rest_framework import serializers

from clinic.models import Patient
from clinic.text import plain_text


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=150)
    fullName = serializers.CharField(source='full_name', max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False, write_only=True)
    gender = serializers.ChoiceField(choices=[c[0] for c in Patient.GENDER_CHOICES])
    dob = serializers.DateField()
    nationalId = serializers.CharField(source='national_id', max_length=64)
    phone = serializers.CharField(max_length=32)
    address = serializers.CharField(max_length=255)

    def validate_fullName(self, v):
        v = plain_text(v)
        if not v:
            raise serializers.ValidationError('Full name is required')
        return v

    def validate_address(self, v):
        return plain_text(v)


class ProfileUpdateSerializer(serializers.Serializer):
    fullName = serializers.CharField(source='full_name', max_length=255, required=False, allow_blank=True)
    gender = serializers.ChoiceField(choices=[c[0] for c in Patient.GENDER_CHOICES], required=False)
    dob = serializers.DateField(required=False)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_fullName(self, v):
        return plain_text(v)

    def validate_address(self, v):
        return plain_text(v)


class EmailSerializer(serializers.Serializer):
    email = serializers.EmailField()


class OtpVerifySerializer(serializers.Serializer):
    email = serializers.EmailField()
    otp = serializers.CharField(max_length=8)


class OtpResetSerializer(OtpVerifySerializer):
    newPassword = serializers.CharField(source='new_password', trim_whitespace=False)


class NewPasswordSerializer(serializers.Serializer):
    newPassword = serializers.CharField(source='new_password', trim_whitespace=False)


class GoogleCodeSerializer(serializers.Serializer):
    code = serializers.CharField()
