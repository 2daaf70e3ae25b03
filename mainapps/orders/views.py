from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from mainapps.accounts.permissions import (
    IsAdminOrSuperUser,
    StandardResultsSetPagination,
    is_admin_user,
)
from mainapps.p2p.exceptions import ConcurrentModification, InvalidTransition, TransferNotAllowed
from mainapps.p2p.serializers import P2pTransferSerializer
from mainapps.p2p.services import open_transfer
from .models import Order
from .serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    P2pDetailsSerializer,
    SentRequestSerializer,
)
from .services import (
    OrderError,
    create_order,
    review_sent_request,
    set_order_status,
    submit_sent_request,
)


class OrderViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   mixins.CreateModelMixin,
                   viewsets.GenericViewSet):
    """Orders for the signed-in buyer, plus the admin order desk"""
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        queryset = Order.objects.select_related('nft', 'user').prefetch_related(
            'p2p_transfers__partner_payment_method'
        )
        if self.action in ['admin_list', 'update_status', 'pending_sent', 'approve_sent', 'reject_sent']:
            return queryset
        if self.action == 'retrieve' and is_admin_user(self.request.user):
            return queryset
        return queryset.filter(user=self.request.user)

    def get_permissions(self):
        if self.action in ['admin_list', 'update_status', 'pending_sent', 'approve_sent', 'reject_sent']:
            permission_classes = [IsAdminOrSuperUser]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def get_serializer_class(self):
        if self.action == 'create':
            return OrderCreateSerializer
        return OrderSerializer

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            order = create_order(
                user=request.user,
                nft=data['nft'],
                total_price=data['total_price'],
                quantity=data['quantity'],
                payment_method=data['payment_method'],
                transaction_id=data.get('transaction_id') or None,
                sender_address=data.get('sender_address') or None,
                notes=data.get('notes', ''),
                p2p=data.get('p2p'),
            )
        except (OrderError, TransferNotAllowed) as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        order.refresh_from_db()
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='submit-sent')
    def submit_sent(self, request, pk=None):
        """Buyer reports the crypto payment was sent from ``sender_address``"""
        order = self.get_object()
        serializer = SentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            submit_sent_request(order, serializer.validated_data['sender_address'])
        except OrderError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=['post'], url_path='start-p2p')
    def start_p2p(self, request, pk=None):
        """Open a new P2P transfer, e.g. after an appeal was approved"""
        order = self.get_object()
        serializer = P2pDetailsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            transfer = open_transfer(
                order,
                partner_address=data['partner_address'],
                partner_payment_method=data['partner_payment_method'],
                amount=data.get('amount', order.total_price),
                network=data['network'],
                sender_address=data.get('sender_address') or '',
            )
        except TransferNotAllowed as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(P2pTransferSerializer(transfer).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='admin-list')
    def admin_list(self, request):
        queryset = self.get_queryset()
        order_status = request.query_params.get('status')
        if order_status:
            queryset = queryset.filter(status=order_status)
        payment_method = request.query_params.get('payment_method')
        if payment_method:
            queryset = queryset.filter(payment_method=payment_method)

        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(OrderSerializer(page, many=True).data)
        return Response(OrderSerializer(queryset, many=True).data)

    @action(detail=True, methods=['post'], url_path='update-status')
    def update_status(self, request, pk=None):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = set_order_status(order, serializer.validated_data['status'])
        except OrderError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except (InvalidTransition, ConcurrentModification) as exc:
            return Response({'error': str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=['get'], url_path='pending-sent')
    def pending_sent(self, request):
        queryset = self.get_queryset().filter(status=Order.Status.PENDING_SENT)
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(OrderSerializer(page, many=True).data)
        return Response(OrderSerializer(queryset, many=True).data)

    @action(detail=True, methods=['post'], url_path='approve-sent')
    def approve_sent(self, request, pk=None):
        return self._review_sent(approve=True)

    @action(detail=True, methods=['post'], url_path='reject-sent')
    def reject_sent(self, request, pk=None):
        return self._review_sent(approve=False)

    def _review_sent(self, approve):
        order = self.get_object()
        try:
            review_sent_request(order, approve)
        except OrderError as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data)
