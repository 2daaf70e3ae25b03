from rest_framework import serializers

from mainapps.p2p.config import INTEGER_SETTING_KEYS
from .models import Category, Nft, P2pNetwork, PaymentMethod, Setting


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'description', 'is_active']
        read_only_fields = ['id']


class NftSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)

    class Meta:
        model = Nft
        fields = [
            'id', 'name', 'description', 'image_path', 'price', 'quantity',
            'blockchain', 'contract_address', 'token_id', 'status',
            'category', 'category_name', 'views', 'likes', 'created_at'
        ]
        read_only_fields = fields


class PaymentMethodSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentMethod
        fields = [
            'id', 'name', 'description', 'icon', 'logo_path', 'wallet_address',
            'qr_code', 'is_active', 'sort_order', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class P2pNetworkSerializer(serializers.ModelSerializer):
    class Meta:
        model = P2pNetwork
        fields = ['id', 'name', 'currency_symbol', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class SettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Setting
        fields = ['key', 'value', 'description', 'updated_at']
        read_only_fields = ['updated_at']

    def validate(self, attrs):
        key = attrs.get('key') or getattr(self.instance, 'key', None)
        value = attrs.get('value')
        if key in INTEGER_SETTING_KEYS and value is not None:
            try:
                minutes = int(value)
            except (TypeError, ValueError):
                raise serializers.ValidationError({'value': 'Must be a whole number of minutes.'})
            if minutes < 1:
                raise serializers.ValidationError({'value': 'Must be at least 1 minute.'})
            attrs['value'] = str(minutes)
        return attrs
