from decimal import Decimal

from mainapps.marketplace.models import Category, Nft, PaymentMethod, Setting
from mainapps.p2p.config import AUTO_RELEASE_KEY


def test_catalog_hides_drafts_and_filters_by_category(api_client, nft):
    art = Category.objects.create(name='Digital Art')
    nft.category = art
    nft.save()
    Nft.objects.create(name='Hidden', price=Decimal('1.00'), status=Nft.Status.DRAFT)

    response = api_client.get('/api/v1/marketplace/nfts/')
    assert [row['name'] for row in response.data['results']] == ['Genesis #1']

    response = api_client.get('/api/v1/marketplace/nfts/', {'category': 'digital-art'})
    assert response.data['count'] == 1
    response = api_client.get('/api/v1/marketplace/nfts/', {'category': str(art.pk + 1)})
    assert response.data['count'] == 0


def test_viewing_nft_counts_views(api_client, nft):
    response = api_client.get(f'/api/v1/marketplace/nfts/{nft.pk}/')

    assert response.status_code == 200
    nft.refresh_from_db()
    assert nft.views == 1


def test_public_sees_active_payment_methods_only(api_client, payment_method):
    PaymentMethod.objects.create(name='Retired Bank', is_active=False)

    response = api_client.get('/api/v1/marketplace/payment-methods/')

    assert [row['name'] for row in response.data] == ['Bank Transfer']


def test_only_admins_manage_payment_methods(buyer_client, admin_client):
    payload = {'name': 'Mobile Money', 'wallet_address': 'MM-001'}

    assert buyer_client.post('/api/v1/marketplace/payment-methods/', payload, format='json').status_code == 403
    response = admin_client.post('/api/v1/marketplace/payment-methods/', payload, format='json')
    assert response.status_code == 201
    assert PaymentMethod.objects.filter(name='Mobile Money').exists()


def test_p2p_timer_setting_must_be_whole_minutes(admin_client):
    response = admin_client.post(
        '/api/v1/marketplace/settings/', {'key': AUTO_RELEASE_KEY, 'value': 'ten'}, format='json'
    )
    assert response.status_code == 400

    response = admin_client.post(
        '/api/v1/marketplace/settings/', {'key': AUTO_RELEASE_KEY, 'value': '10'}, format='json'
    )
    assert response.status_code == 201

    response = admin_client.patch(
        f'/api/v1/marketplace/settings/{AUTO_RELEASE_KEY}/', {'value': '0'}, format='json'
    )
    assert response.status_code == 400
    assert Setting.get_value(AUTO_RELEASE_KEY) == '10'


def test_settings_are_admin_only(buyer_client):
    assert buyer_client.get('/api/v1/marketplace/settings/').status_code == 403


def test_put_creates_missing_setting_and_post_updates_existing(admin_client):
    url = f'/api/v1/marketplace/settings/{AUTO_RELEASE_KEY}/'

    response = admin_client.put(url, {'value': '20'}, format='json')
    assert response.status_code == 201
    assert Setting.get_value(AUTO_RELEASE_KEY) == '20'

    response = admin_client.put(url, {'value': '25'}, format='json')
    assert response.status_code == 200
    assert Setting.get_value(AUTO_RELEASE_KEY) == '25'

    response = admin_client.post(
        '/api/v1/marketplace/settings/', {'key': AUTO_RELEASE_KEY, 'value': '12'}, format='json'
    )
    assert response.status_code == 200
    assert Setting.objects.filter(key=AUTO_RELEASE_KEY).count() == 1
    assert Setting.get_value(AUTO_RELEASE_KEY) == '12'
