from decimal import Decimal

from rest_framework import serializers

from mainapps.marketplace.models import Nft, P2pNetwork, PaymentMethod
from mainapps.p2p.serializers import P2pTransferSerializer
from .models import Order


class OrderSerializer(serializers.ModelSerializer):
    nft_name = serializers.CharField(source='nft.name', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)
    p2p_transfer = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'user', 'user_email', 'nft', 'nft_name',
            'total_price', 'quantity', 'payment_method', 'transaction_id',
            'sender_address', 'status', 'notes', 'p2p_transfer',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_p2p_transfer(self, obj):
        transfer = obj.active_p2p_transfer
        if transfer is None:
            return None
        return P2pTransferSerializer(transfer, context=self.context).data


class P2pDetailsSerializer(serializers.Serializer):
    partner_address = serializers.CharField(max_length=255)
    partner_payment_method = serializers.PrimaryKeyRelatedField(
        queryset=PaymentMethod.objects.filter(is_active=True)
    )
    network = serializers.SlugRelatedField(
        slug_field='name',
        queryset=P2pNetwork.objects.filter(is_active=True)
    )
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0.01'), required=False
    )
    sender_address = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate(self, attrs):
        attrs['network'] = attrs['network'].name
        return attrs


class OrderCreateSerializer(serializers.Serializer):
    nft = serializers.PrimaryKeyRelatedField(queryset=Nft.objects.all())
    total_price = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0)
    quantity = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=1, default=1)
    payment_method = serializers.ChoiceField(choices=Order.PaymentMethod.choices)
    transaction_id = serializers.CharField(max_length=255, required=False, allow_blank=True)
    sender_address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    p2p = P2pDetailsSerializer(required=False)

    def validate(self, attrs):
        if attrs['payment_method'] == Order.PaymentMethod.P2P and not attrs.get('p2p'):
            raise serializers.ValidationError({'p2p': 'P2P details are required for P2P orders.'})
        return attrs


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[
        (value, label) for value, label in Order.Status.choices
        if value in Order.ADMIN_SETTABLE_STATUSES
    ])


class SentRequestSerializer(serializers.Serializer):
    sender_address = serializers.CharField(max_length=255)
