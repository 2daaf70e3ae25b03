import logging

from mainapps.marketplace.models import Setting
from mainapps.p2p.config import AUTO_RELEASE_KEY, PAYMENT_DEADLINE_KEY, load_p2p_config


def test_defaults_when_settings_missing(db, caplog):
    with caplog.at_level(logging.WARNING, logger='mainapps.p2p.config'):
        config = load_p2p_config()

    assert config.payment_deadline_minutes == 15
    assert config.auto_release_minutes == 5
    assert PAYMENT_DEADLINE_KEY in caplog.text
    assert AUTO_RELEASE_KEY in caplog.text


def test_reads_setting_rows(db):
    Setting.set_value(PAYMENT_DEADLINE_KEY, 20)
    Setting.set_value(AUTO_RELEASE_KEY, ' 45 ')

    config = load_p2p_config()

    assert config.payment_deadline_minutes == 20
    assert config.auto_release_minutes == 45


def test_malformed_value_falls_back_to_default(db, caplog):
    Setting.set_value(PAYMENT_DEADLINE_KEY, 'soon')
    Setting.set_value(AUTO_RELEASE_KEY, '0')

    with caplog.at_level(logging.WARNING, logger='mainapps.p2p.config'):
        config = load_p2p_config()

    assert config.payment_deadline_minutes == 15
    assert config.auto_release_minutes == 5
    assert 'not a whole number' in caplog.text
