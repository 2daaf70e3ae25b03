import logging

from django.db.models import ProtectedError, Q
from rest_framework import serializers, status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from mainapps.accounts.permissions import (
    IsAdminOrSuperUser,
    StandardResultsSetPagination,
    is_admin_user,
)
from .models import Category, Nft, P2pNetwork, PaymentMethod, Setting
from .serializers import (
    CategorySerializer,
    NftSerializer,
    P2pNetworkSerializer,
    PaymentMethodSerializer,
    SettingSerializer,
)

logger = logging.getLogger(__name__)


class NftViewSet(viewsets.ReadOnlyModelViewSet):
    """Public catalog of NFTs that can be ordered"""
    serializer_class = NftSerializer
    permission_classes = [AllowAny]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        queryset = Nft.objects.select_related('category').exclude(
            status__in=[Nft.Status.DRAFT, Nft.Status.INACTIVE]
        )
        category = self.request.query_params.get('category')
        if category:
            if category.isdigit():
                queryset = queryset.filter(category_id=int(category))
            else:
                queryset = queryset.filter(category__slug=category)
        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(description__icontains=search)
            )
        return queryset

    def retrieve(self, request, *args, **kwargs):
        self.get_object().record_view()
        return super().retrieve(request, *args, **kwargs)


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Category.objects.filter(is_active=True)
    serializer_class = CategorySerializer
    permission_classes = [AllowAny]
    lookup_field = 'slug'


class ActiveForPublicMixin:
    """Everyone reads the active rows; admins see and edit all of them."""

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            permission_classes = [AllowAny]
        else:
            permission_classes = [IsAdminOrSuperUser]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        queryset = super().get_queryset()
        if not is_admin_user(self.request.user):
            queryset = queryset.filter(is_active=True)
        return queryset

    def perform_destroy(self, instance):
        pk = instance.pk
        try:
            instance.delete()
        except ProtectedError:
            raise serializers.ValidationError({'error': f"{instance} is used by existing transfers; deactivate it instead"})
        logger.info("Admin %s deleted %s %s", self.request.user.pk, type(instance).__name__, pk)


class PaymentMethodViewSet(ActiveForPublicMixin, viewsets.ModelViewSet):
    queryset = PaymentMethod.objects.all()
    serializer_class = PaymentMethodSerializer


class P2pNetworkViewSet(ActiveForPublicMixin, viewsets.ModelViewSet):
    queryset = P2pNetwork.objects.all()
    serializer_class = P2pNetworkSerializer


class SettingViewSet(viewsets.ModelViewSet):
    """Admin-only key/value settings, addressed by key"""
    queryset = Setting.objects.all()
    serializer_class = SettingSerializer
    permission_classes = [IsAdminOrSuperUser]
    lookup_field = 'key'
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def perform_update(self, serializer):
        setting = serializer.save()
        logger.info("Setting %s updated to %r by %s", setting.key, setting.value, self.request.user.pk)

    def create(self, request, *args, **kwargs):
        """POST to an existing key updates it instead of failing on uniqueness"""
        instance = Setting.objects.filter(key=request.data.get('key')).first()
        if instance is None:
            return super().create(request, *args, **kwargs)
        return self._save_setting(instance, request.data, partial=True)

    def update(self, request, *args, **kwargs):
        """PUT creates the setting when the key does not exist yet"""
        data = request.data.copy()
        data['key'] = kwargs[self.lookup_field]
        instance = Setting.objects.filter(key=data['key']).first()
        if instance is None:
            serializer = self.get_serializer(data=data)
            serializer.is_valid(raise_exception=True)
            self.perform_create(serializer)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return self._save_setting(instance, data, partial=kwargs.get('partial', False))

    def _save_setting(self, instance, data, partial):
        serializer = self.get_serializer(instance, data=data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(serializer.data)
