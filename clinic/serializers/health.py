from rest_framework import serializers

KINDS = ('bmi', 'bp')


class HealthDataAppendSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=KINDS)
    data = serializers.DictField()


class HealthDataRemoveSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=KINDS)
    index = serializers.IntegerField()
