import logging

from django.utils import timezone
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from mainapps.accounts.permissions import (
    IsAdminOrSuperUser,
    StandardResultsSetPagination,
    is_admin_user,
)
from mainapps.support.models import SupportTicket
from mainapps.support.serializers import SupportTicketDetailSerializer
from mainapps.support.services import open_ticket
from . import services
from .config import load_p2p_config
from .exceptions import ConcurrentModification, InvalidTransition
from .models import P2pTransfer
from .serializers import (
    AppealSerializer,
    AppealTransferSerializer,
    AskQuestionSerializer,
    MarkPaidSerializer,
    P2pTransferSerializer,
    ResolveAppealSerializer,
    TransitionSerializer,
)

logger = logging.getLogger(__name__)


class TransitionResponseMixin:
    """Runs a service transition and maps state conflicts to HTTP 409."""

    response_serializer_class = P2pTransferSerializer

    def get_p2p_config(self):
        if getattr(self, '_p2p_config', None) is None:
            self._p2p_config = load_p2p_config()
        return self._p2p_config

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['p2p_config'] = self.get_p2p_config()
        return context

    def run_transition(self, transition, *args, **kwargs):
        try:
            transfer = transition(*args, **kwargs)
        except (InvalidTransition, ConcurrentModification) as exc:
            logger.info("Rejected P2P action by user %s: %s", self.request.user.pk, exc)
            return Response({'error': str(exc)}, status=status.HTTP_409_CONFLICT)
        serializer = self.response_serializer_class(transfer, context=self.get_serializer_context())
        return Response(serializer.data)


class P2pTransferViewSet(TransitionResponseMixin,
                         mixins.RetrieveModelMixin,
                         viewsets.GenericViewSet):
    """
    Transfer page actions, addressed by the transfer's link code.

    Every request first applies any timer transition that is already due, so the
    page never shows a transfer that should have expired or been released.
    """
    serializer_class = P2pTransferSerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'transfer_code'

    def get_queryset(self):
        queryset = P2pTransfer.objects.select_related('order', 'partner_payment_method')
        if is_admin_user(self.request.user):
            return queryset
        return queryset.filter(order__user=self.request.user)

    def get_object(self):
        transfer = super().get_object()
        return services.sync_transfer_timers(transfer, config=self.get_p2p_config())

    @action(detail=True, methods=['get'], url_path='status')
    def poll_status(self, request, transfer_code=None):
        """Lightweight poll for the countdown on the transfer page"""
        transfer = self.get_object()
        now = timezone.now()
        return Response({
            'transfer_code': transfer.transfer_code,
            'status': transfer.status,
            'remaining_seconds': transfer.get_remaining_time(config=self.get_p2p_config(), now=now),
            'auto_release_at': transfer.auto_release_at,
            'should_auto_release': transfer.should_auto_release(now),
        })

    @action(detail=True, methods=['post'], url_path='mark-paid')
    def mark_paid(self, request, transfer_code=None):
        transfer = self.get_object()
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run_transition(
            services.mark_payment_completed, transfer,
            config=self.get_p2p_config(),
            expected_status=serializer.validated_data.get('expected_status'),
            sender_address=serializer.validated_data.get('sender_address'),
        )

    @action(detail=True, methods=['post'])
    def release(self, request, transfer_code=None):
        transfer = self.get_object()
        serializer = TransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run_transition(
            services.release_transfer, transfer,
            expected_status=serializer.validated_data.get('expected_status'),
        )

    @action(detail=True, methods=['post'])
    def appeal(self, request, transfer_code=None):
        transfer = self.get_object()
        serializer = AppealSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run_transition(
            services.appeal_transfer, transfer,
            reason=serializer.validated_data['reason'],
            expected_status=serializer.validated_data.get('expected_status'),
        )

    @action(detail=True, methods=['post'])
    def cancel(self, request, transfer_code=None):
        transfer = self.get_object()
        serializer = TransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run_transition(
            services.cancel_transfer, transfer,
            expected_status=serializer.validated_data.get('expected_status'),
        )


class AppealViewSet(TransitionResponseMixin, viewsets.ReadOnlyModelViewSet):
    """Admin review of transfers that were ever appealed, newest appeal first"""
    serializer_class = AppealTransferSerializer
    response_serializer_class = AppealTransferSerializer
    permission_classes = [IsAdminOrSuperUser]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        queryset = P2pTransfer.objects.filter(appealed_at__isnull=False).select_related(
            'order', 'order__user', 'partner_payment_method', 'resolved_by'
        ).order_by('-appealed_at')
        transfer_status = self.request.query_params.get('status')
        if transfer_status:
            queryset = queryset.filter(status=transfer_status)
        return queryset

    @action(detail=True, methods=['post'])
    def resolve(self, request, pk=None):
        transfer = self.get_object()
        serializer = ResolveAppealSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self.run_transition(
            services.resolve_appeal, transfer,
            approve=serializer.validated_data['action'] == 'approve',
            admin=request.user,
            expected_status=serializer.validated_data.get('expected_status'),
        )

    @action(detail=True, methods=['post'], url_path='ask-question')
    def ask_question(self, request, pk=None):
        """Open a high-priority support ticket to the buyer about this appeal"""
        transfer = self.get_object()
        serializer = AskQuestionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = open_ticket(
            user=transfer.order.user,
            author=request.user,
            subject=serializer.validated_data.get('subject')
            or f"Question about P2P transfer {transfer.order.order_number}",
            message=serializer.validated_data['question'],
            priority=SupportTicket.Priority.HIGH,
            p2p_transfer=transfer,
        )
        return Response(
            SupportTicketDetailSerializer(ticket).data,
            status=status.HTTP_201_CREATED
        )
