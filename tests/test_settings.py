from decimal import Decimal

import pytest

from t1_bridge import config
from t1_bridge.errors import ConfigError
from t1_bridge.settings import Settings


def test_defaults_come_from_config():
    settings = Settings.from_env({})

    assert settings.max_bridges_per_day == config.MAX_BRIDGES_PER_DAY
    assert settings.min_amount == Decimal('0.0002')
    assert settings.sepolia.chain_id == config.SEPOLIA_CHAIN_ID
    assert settings.sepolia.eip1559
    assert not settings.t1.eip1559


def test_env_overrides():
    settings = Settings.from_env({
        'T1_MAX_BRIDGES_PER_DAY': '3',
        'T1_MAX_AMOUNT': '0.005',
        'T1_ACCOUNTS_FILE': ' wallets.txt ',
        'T1_T1_RPC': '',
    })

    assert settings.max_bridges_per_day == 3
    assert settings.max_amount == Decimal('0.005')
    assert settings.accounts_file == 'wallets.txt'
    assert settings.t1_rpc == config.T1_RPC


def test_unparseable_override():
    with pytest.raises(ConfigError):
        Settings.from_env({'T1_MIN_DELAY_MS': 'soon'})


@pytest.mark.parametrize('kwargs', [
    {'min_amount': Decimal('0.02'), 'max_amount': Decimal('0.01')},
    {'min_delay_ms': 10, 'max_delay_ms': 5},
    {'max_bridges_per_day': 0},
])
def test_invalid_ranges(kwargs):
    with pytest.raises(ConfigError):
        Settings(**kwargs)


@pytest.mark.parametrize('name, raw', [
    ('T1_MIN_AMOUNT', 'nan'),
    ('T1_MAX_AMOUNT', 'Infinity'),
    ('T1_MIN_AMOUNT', '-inf'),
    ('T1_OUTBOUND_VALUE_BUFFER', 'sNaN'),
])
def test_non_finite_override_is_config_error(name, raw):
    with pytest.raises(ConfigError, match='конечное'):
        Settings.from_env({name: raw})


@pytest.mark.parametrize('kwargs', [
    {'max_amount': Decimal('Infinity')},
    {'min_amount': Decimal('NaN')},
    {'outbound_value_buffer': Decimal('-0.0001')},
])
def test_non_finite_or_negative_decimals_rejected(kwargs):
    with pytest.raises(ConfigError):
        Settings(**kwargs)
