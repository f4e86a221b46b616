"""
Contact Management Serializers

Admin-side payloads. Public submissions go through
``contact.services.normalize_form`` so both accepted payload shapes share
one validation path.
"""
from rest_framework import serializers

from .models import ContactMessage


class ContactMessageSerializer(serializers.ModelSerializer):
    """Admin representation of a stored inquiry."""

    full_name = serializers.ReadOnlyField()
    service = serializers.ReadOnlyField(source='service_label')

    class Meta:
        model = ContactMessage
        fields = [
            'id', 'first_name', 'last_name', 'full_name', 'email', 'phone',
            'device_type', 'service_needed', 'service', 'message', 'status',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class EmailReplySerializer(serializers.Serializer):
    """
    Body of ``POST send-email-reply``.

    Accepts the camelCase keys sent by the admin page script.
    """

    to = serializers.EmailField(max_length=255)
    subject = serializers.CharField(max_length=255)
    message = serializers.CharField()
    includeSignature = serializers.BooleanField(required=False, default=False)
    messageId = serializers.UUIDField(required=False, allow_null=True, default=None)

    def validate_subject(self, value):
        return value.strip()
