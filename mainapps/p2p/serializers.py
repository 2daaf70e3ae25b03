from django.utils import timezone
from rest_framework import serializers

from mainapps.marketplace.serializers import PaymentMethodSerializer
from .config import load_p2p_config
from .models import P2pTransfer
from .state_machine import TransferStatus


class P2pTransferSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source='order.order_number', read_only=True)
    partner_payment_method = PaymentMethodSerializer(read_only=True)
    remaining_seconds = serializers.SerializerMethodField()
    is_terminal = serializers.ReadOnlyField()

    class Meta:
        model = P2pTransfer
        fields = [
            'id', 'transfer_code', 'order', 'order_number', 'partner_address',
            'partner_payment_method', 'amount', 'sender_address', 'network',
            'status', 'is_terminal', 'remaining_seconds', 'payment_completed_at',
            'release_timer_started_at', 'auto_release_at', 'appeal_reason',
            'appealed_at', 'resolved_at', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_remaining_seconds(self, obj):
        config = self.context.get('p2p_config')
        if config is None:
            config = self.context['p2p_config'] = load_p2p_config()
        return obj.get_remaining_time(config=config, now=self.context.get('now') or timezone.now())


class AppealTransferSerializer(P2pTransferSerializer):
    buyer_email = serializers.EmailField(source='order.user.email', read_only=True)
    resolved_by_email = serializers.EmailField(source='resolved_by.email', read_only=True, default=None)

    class Meta(P2pTransferSerializer.Meta):
        fields = P2pTransferSerializer.Meta.fields + ['buyer_email', 'resolved_by_email']
        read_only_fields = fields


class TransitionSerializer(serializers.Serializer):
    expected_status = serializers.ChoiceField(choices=TransferStatus.choices, required=False)


class MarkPaidSerializer(TransitionSerializer):
    sender_address = serializers.CharField(max_length=255, required=False, allow_blank=True)


class AppealSerializer(TransitionSerializer):
    reason = serializers.CharField(max_length=1000)


class ResolveAppealSerializer(TransitionSerializer):
    action = serializers.ChoiceField(choices=[('approve', 'Approve'), ('reject', 'Reject')])


class AskQuestionSerializer(serializers.Serializer):
    question = serializers.CharField(max_length=2000)
    subject = serializers.CharField(max_length=255, required=False)
