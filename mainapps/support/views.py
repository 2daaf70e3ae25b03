import logging

from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from mainapps.accounts.permissions import (
    IsAdminOrSuperUser,
    StandardResultsSetPagination,
    is_admin_user,
)
from .models import SupportTicket
from .serializers import (
    SupportReplySerializer,
    SupportStatusSerializer,
    SupportTicketCreateSerializer,
    SupportTicketDetailSerializer,
    SupportTicketSerializer,
)
from .services import add_reply, open_ticket

logger = logging.getLogger(__name__)


class SupportTicketViewSet(mixins.ListModelMixin,
                           mixins.RetrieveModelMixin,
                           mixins.CreateModelMixin,
                           viewsets.GenericViewSet):
    """Support tickets: users see their own, admins see every ticket"""
    serializer_class = SupportTicketSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        queryset = SupportTicket.objects.select_related('user', 'p2p_transfer')
        if self.action in ['list', 'create']:
            return queryset.filter(user=self.request.user)
        if is_admin_user(self.request.user):
            return queryset
        return queryset.filter(user=self.request.user)

    def get_permissions(self):
        if self.action in ['admin_list', 'update_status']:
            permission_classes = [IsAdminOrSuperUser]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def get_serializer_class(self):
        if self.action == 'create':
            return SupportTicketCreateSerializer
        if self.action in ['retrieve', 'reply', 'update_status']:
            return SupportTicketDetailSerializer
        return SupportTicketSerializer

    def create(self, request, *args, **kwargs):
        serializer = SupportTicketCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = open_ticket(
            user=request.user,
            subject=serializer.validated_data['subject'],
            message=serializer.validated_data['message'],
            priority=serializer.validated_data['priority'],
        )
        return Response(
            SupportTicketDetailSerializer(ticket).data,
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['post'])
    def reply(self, request, pk=None):
        ticket = self.get_object()
        if ticket.status == SupportTicket.Status.CLOSED and not is_admin_user(request.user):
            return Response(
                {'error': 'This ticket is closed'},
                status=status.HTTP_400_BAD_REQUEST
            )
        serializer = SupportReplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        add_reply(ticket, request.user, serializer.validated_data['message'])
        ticket.refresh_from_db()
        return Response(SupportTicketDetailSerializer(ticket).data)

    @action(detail=False, methods=['get'], url_path='admin-list')
    def admin_list(self, request):
        queryset = SupportTicket.objects.select_related('user', 'p2p_transfer')
        ticket_status = request.query_params.get('status')
        if ticket_status:
            queryset = queryset.filter(status=ticket_status)
        priority = request.query_params.get('priority')
        if priority:
            queryset = queryset.filter(priority=priority)

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = SupportTicketSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(SupportTicketSerializer(queryset, many=True).data)

    @action(detail=True, methods=['post'], url_path='update-status')
    def update_status(self, request, pk=None):
        ticket = self.get_object()
        serializer = SupportStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket.status = serializer.validated_data['status']
        ticket.save(update_fields=['status', 'updated_at'])
        logger.info("Ticket %s set to %s by %s", ticket.ticket_unique_id, ticket.status, request.user.pk)
        return Response(SupportTicketDetailSerializer(ticket).data)
