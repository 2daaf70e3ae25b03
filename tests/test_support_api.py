from mainapps.support.models import SupportTicket


def open_ticket(client, **overrides):
    payload = {'subject': 'Order stuck', 'priority': 'medium', 'message': 'My order has not moved'}
    payload.update(overrides)
    return client.post('/api/v1/support/tickets/', payload, format='json')


def test_user_opens_ticket_with_first_message(buyer_client, buyer):
    response = open_ticket(buyer_client)

    assert response.status_code == 201
    assert response.data['ticket_unique_id'].startswith('#')
    assert len(response.data['ticket_unique_id']) == 9
    assert response.data['status'] == SupportTicket.Status.OPEN
    assert [m['message'] for m in response.data['messages']] == ['My order has not moved']


def test_invalid_priority_is_rejected(buyer_client):
    assert open_ticket(buyer_client, priority='urgent').status_code == 400


def test_tickets_are_private(buyer_client, other_client):
    ticket_id = open_ticket(buyer_client).data['id']

    assert other_client.get('/api/v1/support/tickets/').data['count'] == 0
    assert other_client.get(f'/api/v1/support/tickets/{ticket_id}/').status_code == 404
    assert other_client.post(
        f'/api/v1/support/tickets/{ticket_id}/reply/', {'message': 'hi'}, format='json'
    ).status_code == 404


def test_admin_reply_moves_ticket_in_progress(buyer_client, admin_client):
    ticket_id = open_ticket(buyer_client).data['id']

    response = admin_client.post(
        f'/api/v1/support/tickets/{ticket_id}/reply/', {'message': 'Looking into it'}, format='json'
    )

    assert response.status_code == 200
    assert response.data['status'] == SupportTicket.Status.IN_PROGRESS
    assert response.data['messages'][-1]['is_admin_reply'] is True


def test_closed_ticket_refuses_user_reply(buyer_client, admin_client):
    ticket_id = open_ticket(buyer_client).data['id']
    closed = admin_client.post(
        f'/api/v1/support/tickets/{ticket_id}/update-status/', {'status': 'closed'}, format='json'
    )
    assert closed.data['status'] == SupportTicket.Status.CLOSED

    response = buyer_client.post(
        f'/api/v1/support/tickets/{ticket_id}/reply/', {'message': 'still broken'}, format='json'
    )
    assert response.status_code == 400


def test_admin_list_filters_by_status(buyer_client, admin_client):
    open_ticket(buyer_client)
    open_ticket(buyer_client, subject='Second', priority='high')

    assert buyer_client.get('/api/v1/support/tickets/admin-list/').status_code == 403
    response = admin_client.get('/api/v1/support/tickets/admin-list/', {'priority': 'high'})
    assert response.data['count'] == 1
    assert response.data['results'][0]['subject'] == 'Second'


def test_new_message_touches_ticket(buyer_client):
    created = open_ticket(buyer_client).data
    before = SupportTicket.objects.get(pk=created['id']).updated_at

    buyer_client.post(f"/api/v1/support/tickets/{created['id']}/reply/", {'message': 'ping'}, format='json')

    assert SupportTicket.objects.get(pk=created['id']).updated_at >= before
