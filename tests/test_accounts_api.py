from mainapps.accounts.models import User


def test_me_returns_and_updates_profile(buyer_client):
    response = buyer_client.get('/api/v1/accounts/users/me/')
    assert response.data['email'] == 'buyer@example.com'
    assert response.data['is_admin'] is False

    response = buyer_client.patch(
        '/api/v1/accounts/users/me/', {'wallet_address': 'TQ9buyerWallet'}, format='json'
    )
    assert response.data['wallet_address'] == 'TQ9buyerWallet'


def test_user_management_is_admin_only(buyer_client, admin_client, buyer):
    assert buyer_client.get('/api/v1/accounts/users/').status_code == 403

    response = admin_client.patch(
        f'/api/v1/accounts/users/{buyer.pk}/', {'is_active': False}, format='json'
    )
    assert response.status_code == 200
    buyer.refresh_from_db()
    assert buyer.is_active is False


def test_admin_cannot_delete_own_account(admin_client, admin_user, other_user):
    assert admin_client.delete(f'/api/v1/accounts/users/{admin_user.pk}/').status_code == 400
    assert admin_client.delete(f'/api/v1/accounts/users/{other_user.pk}/').status_code == 204
    assert not User.objects.filter(pk=other_user.pk).exists()


def test_superuser_gets_admin_role(db):
    user = User.objects.create_superuser(email='root@example.com', password='root-pass-123')
    assert user.role == User.Role.ADMIN
    assert user.username == 'root@example.com'
    assert user.is_admin
