from rest_framework import serializers


class ReviewSerializer(serializers.Serializer):
    # rating parsing, range and length are left to the reviews service for their own error codes
    rating = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    reviewMessage = serializers.CharField(source='review_message', required=False, allow_blank=True)
