import logging

from django.conf import settings

from mainapps.marketplace.models import Setting
from .exceptions import ConfigurationMissing
from .state_machine import P2pConfig

logger = logging.getLogger(__name__)

PAYMENT_DEADLINE_KEY = 'p2p_payment_deadline_minutes'
AUTO_RELEASE_KEY = 'p2p_auto_release_minutes'
INTEGER_SETTING_KEYS = (PAYMENT_DEADLINE_KEY, AUTO_RELEASE_KEY)


def default_minutes():
    return {
        PAYMENT_DEADLINE_KEY: settings.P2P_PAYMENT_DEADLINE_MINUTES_DEFAULT,
        AUTO_RELEASE_KEY: settings.P2P_AUTO_RELEASE_MINUTES_DEFAULT,
    }


def read_minutes(key):
    raw = Setting.get_value(key)
    if raw is None:
        raise ConfigurationMissing(key)
    try:
        minutes = int(str(raw).strip())
    except ValueError:
        raise ConfigurationMissing(key) from None
    if minutes < 1:
        raise ConfigurationMissing(key)
    return minutes


def load_p2p_config() -> P2pConfig:
    """Read the P2P timer settings, falling back to the configured defaults."""
    defaults = default_minutes()
    values = {}
    for key, default in defaults.items():
        try:
            values[key] = read_minutes(key)
        except ConfigurationMissing as exc:
            logger.warning("%s; using default of %s minutes", exc, default)
            values[key] = default
    return P2pConfig(
        payment_deadline_minutes=values[PAYMENT_DEADLINE_KEY],
        auto_release_minutes=values[AUTO_RELEASE_KEY],
    )
