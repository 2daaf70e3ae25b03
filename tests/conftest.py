from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from mainapps.accounts.models import User
from mainapps.marketplace.models import Nft, P2pNetwork, PaymentMethod
from mainapps.orders.models import Order
from mainapps.orders.services import create_order
from mainapps.p2p.state_machine import P2pConfig


@pytest.fixture
def t0():
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def config():
    return P2pConfig(payment_deadline_minutes=15, auto_release_minutes=30)


@pytest.fixture
def buyer(db):
    return User.objects.create_user(email='buyer@example.com', password='buyer-pass-123')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email='other@example.com', password='other-pass-123')


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='admin-pass-123',
        is_staff=True,
        role=User.Role.ADMIN,
    )


@pytest.fixture
def nft(db):
    return Nft.objects.create(
        name='Genesis #1',
        price=Decimal('150.00'),
        quantity=Decimal('3'),
        status=Nft.Status.ACTIVE,
    )


@pytest.fixture
def payment_method(db):
    return PaymentMethod.objects.create(name='Bank Transfer', wallet_address='0x' + 'a' * 40)


@pytest.fixture
def network(db):
    return P2pNetwork.objects.create(name='TRC20', currency_symbol='USDT')


@pytest.fixture
def make_p2p_order(buyer, nft, payment_method, network):
    def _make(now=None, user=None):
        return create_order(
            user=user or buyer,
            nft=nft,
            total_price=Decimal('150.00'),
            payment_method=Order.PaymentMethod.P2P,
            p2p={
                'partner_address': 'TQ9partnerAddress0000000000000001',
                'partner_payment_method': payment_method,
                'network': network.name,
            },
            now=now,
        )
    return _make


@pytest.fixture
def p2p_order(make_p2p_order, t0):
    return make_p2p_order(now=t0)


@pytest.fixture
def transfer(p2p_order):
    return p2p_order.p2p_transfers.get()


def _client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def buyer_client(buyer):
    return _client_for(buyer)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)
