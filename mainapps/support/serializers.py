from rest_framework import serializers
from .models import SupportTicket, SupportTicketMessage


class SupportTicketMessageSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = SupportTicketMessage
        fields = ['id', 'user', 'user_email', 'message', 'is_admin_reply', 'created_at']
        read_only_fields = fields


class SupportTicketSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source='user.email', read_only=True)
    p2p_transfer_code = serializers.CharField(
        source='p2p_transfer.transfer_code', read_only=True, default=None
    )

    class Meta:
        model = SupportTicket
        fields = [
            'id', 'ticket_unique_id', 'user', 'user_email', 'subject', 'status',
            'priority', 'p2p_transfer', 'p2p_transfer_code', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class SupportTicketDetailSerializer(SupportTicketSerializer):
    messages = SupportTicketMessageSerializer(many=True, read_only=True)

    class Meta(SupportTicketSerializer.Meta):
        fields = SupportTicketSerializer.Meta.fields + ['messages']
        read_only_fields = fields


class SupportTicketCreateSerializer(serializers.Serializer):
    subject = serializers.CharField(max_length=255)
    priority = serializers.ChoiceField(choices=SupportTicket.Priority.choices)
    message = serializers.CharField()


class SupportReplySerializer(serializers.Serializer):
    message = serializers.CharField()


class SupportStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SupportTicket.Status.choices)
