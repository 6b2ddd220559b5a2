import random
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_account import Account as EthAccount
from loguru import logger

from t1_bridge.context import BotContext
from t1_bridge.models import Account
from t1_bridge.settings import Settings

KEY_1 = '0x' + '11' * 32
KEY_2 = '0x' + '22' * 32
TX_HASH = '0x' + 'ab' * 32


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeChainClient:
    """Подменяет ChainClient: ничего не ходит в сеть."""

    def __init__(self, chain, proxy=None, status=1, balance=10 ** 18):
        self.chain = chain
        self.proxy = proxy
        self.get_balance = AsyncMock(return_value=balance)
        self.get_gas_price = AsyncMock(return_value=10 ** 9)
        self.get_fee_data = AsyncMock(return_value={'maxFeePerGas': 2 * 10 ** 9, 'maxPriorityFeePerGas': 10 ** 9})
        self.send_transaction = AsyncMock(return_value=TX_HASH)
        self.wait = AsyncMock(return_value={'status': status, 'blockNumber': 123})
        self.web3 = MagicMock()
        self.web3.is_connected = AsyncMock(return_value=True)


def make_account(key=KEY_1, **kwargs):
    return Account(address=EthAccount.from_key(key).address, private_key=key, **kwargs)


@pytest.fixture
def settings():
    return Settings(max_bridges_per_day=5, min_delay_ms=1000, max_delay_ms=2000, max_consecutive_failures=3)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def clients():
    return {}


@pytest.fixture
def make_ctx(settings, clock, clients):
    def factory(accounts=None, **kwargs):
        def client_factory(chain, proxy=None):
            if chain.name not in clients:
                clients[chain.name] = FakeChainClient(chain, proxy)
            return clients[chain.name]

        return BotContext(
            settings=kwargs.pop('settings', settings),
            accounts=accounts or [],
            client_factory=client_factory,
            sleep=AsyncMock(),
            clock=clock,
            rng=random.Random(42),
            **kwargs,
        )

    return factory


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level='DEBUG')
    yield records
    logger.remove(handler_id)
