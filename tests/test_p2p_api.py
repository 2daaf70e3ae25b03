from datetime import timedelta

import pytest
from django.utils import timezone

from mainapps.orders.models import Order
from mainapps.p2p import services
from mainapps.p2p.models import P2pTransfer
from mainapps.p2p.state_machine import P2pConfig, TransferStatus
from mainapps.support.models import SupportTicket


@pytest.fixture
def live_transfer(make_p2p_order):
    order = make_p2p_order(now=timezone.now())
    return order.p2p_transfers.get()


def transfer_url(transfer, action=''):
    url = f'/api/v1/p2p/transfers/{transfer.transfer_code}/'
    return f'{url}{action}/' if action else url


def paid(transfer):
    return services.mark_payment_completed(transfer, config=P2pConfig(15, 30))


def appealed(transfer):
    return services.appeal_transfer(paid(transfer), reason='Funds not received')


def test_buyer_sees_transfer_with_countdown(buyer_client, live_transfer):
    response = buyer_client.get(transfer_url(live_transfer))

    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.PENDING
    assert 0 < response.data['remaining_seconds'] <= 15 * 60
    assert response.data['partner_payment_method']['name'] == 'Bank Transfer'


def test_other_users_cannot_see_transfer(other_client, live_transfer):
    assert other_client.get(transfer_url(live_transfer)).status_code == 404


def test_anonymous_requests_are_rejected(api_client, live_transfer):
    assert api_client.get(transfer_url(live_transfer)).status_code == 401


def test_reading_an_overdue_transfer_cancels_it(buyer_client, make_p2p_order):
    order = make_p2p_order(now=timezone.now() - timedelta(minutes=20))
    transfer = order.p2p_transfers.get()

    response = buyer_client.get(transfer_url(transfer))

    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.CANCELLED
    assert response.data['remaining_seconds'] is None
    assert Order.objects.get(pk=order.pk).status == Order.Status.CANCELLED


def test_mark_paid_then_release(buyer_client, live_transfer):
    response = buyer_client.post(
        transfer_url(live_transfer, 'mark-paid'),
        {'sender_address': 'TQ9senderAddress'},
        format='json',
    )
    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.PAYMENT_COMPLETED
    assert response.data['auto_release_at'] is not None
    assert response.data['sender_address'] == 'TQ9senderAddress'

    response = buyer_client.post(transfer_url(live_transfer, 'release'), format='json')
    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.RELEASED
    assert Order.objects.get(pk=live_transfer.order_id).status == Order.Status.SENT


def test_repeated_action_reports_conflict(buyer_client, live_transfer):
    paid(live_transfer)
    buyer_client.post(transfer_url(live_transfer, 'release'), format='json')

    response = buyer_client.post(transfer_url(live_transfer, 'release'), format='json')

    assert response.status_code == 409
    assert 'no longer available' in response.data['error']


def test_stale_expected_status_reports_conflict(buyer_client, live_transfer):
    paid(live_transfer)

    response = buyer_client.post(
        transfer_url(live_transfer, 'appeal'),
        {'reason': 'wrong amount', 'expected_status': 'pending'},
        format='json',
    )

    assert response.status_code == 409
    assert P2pTransfer.objects.get(pk=live_transfer.pk).status == TransferStatus.PAYMENT_COMPLETED


def test_appeal_reason_is_limited(buyer_client, live_transfer):
    paid(live_transfer)

    response = buyer_client.post(
        transfer_url(live_transfer, 'appeal'), {'reason': 'x' * 1001}, format='json'
    )
    assert response.status_code == 400

    response = buyer_client.post(
        transfer_url(live_transfer, 'appeal'), {'reason': 'Partner sent half'}, format='json'
    )
    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.APPEALED
    assert response.data['remaining_seconds'] is None


def test_cancel_pending_transfer(buyer_client, live_transfer):
    response = buyer_client.post(transfer_url(live_transfer, 'cancel'), format='json')

    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.CANCELLED


def test_status_poll(buyer_client, live_transfer):
    response = buyer_client.get(transfer_url(live_transfer, 'status'))

    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.PENDING
    assert response.data['should_auto_release'] is False
    assert 0 < response.data['remaining_seconds'] <= 900


def test_appeals_list_is_admin_only(buyer_client, admin_client, live_transfer):
    appealed(live_transfer)

    assert buyer_client.get('/api/v1/p2p/appeals/').status_code == 403

    response = admin_client.get('/api/v1/p2p/appeals/')
    assert response.status_code == 200
    assert response.data['count'] == 1
    assert response.data['results'][0]['buyer_email'] == 'buyer@example.com'
    assert response.data['results'][0]['appeal_reason'] == 'Funds not received'


def test_admin_resolves_appeal(admin_client, live_transfer):
    appealed(live_transfer)

    response = admin_client.post(
        f'/api/v1/p2p/appeals/{live_transfer.pk}/resolve/', {'action': 'reject'}, format='json'
    )

    assert response.status_code == 200
    assert response.data['status'] == TransferStatus.APPEAL_REJECTED
    assert response.data['resolved_by_email'] == 'admin@example.com'
    assert Order.objects.get(pk=live_transfer.order_id).status == Order.Status.APPEAL_REJECTED

    again = admin_client.post(
        f'/api/v1/p2p/appeals/{live_transfer.pk}/resolve/', {'action': 'approve'}, format='json'
    )
    assert again.status_code == 409


def test_admin_asks_buyer_a_question(admin_client, buyer, live_transfer):
    appealed(live_transfer)

    response = admin_client.post(
        f'/api/v1/p2p/appeals/{live_transfer.pk}/ask-question/',
        {'question': 'Can you upload the bank receipt?'},
        format='json',
    )

    assert response.status_code == 201
    ticket = SupportTicket.objects.get(pk=response.data['id'])
    assert ticket.user == buyer
    assert ticket.priority == SupportTicket.Priority.HIGH
    assert ticket.p2p_transfer_id == live_transfer.pk
    assert ticket.ticket_unique_id.startswith('#')
    message = ticket.messages.get()
    assert message.is_admin_reply
    assert message.message == 'Can you upload the bank receipt?'
