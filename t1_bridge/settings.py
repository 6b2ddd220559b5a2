import os
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from dotenv import load_dotenv

from t1_bridge import config
from t1_bridge.errors import ConfigError
from t1_bridge.models import ChainConfig

ENV_PREFIX = 'T1_'


@dataclass(frozen=True)
class Settings:
    """Настройки бота. По умолчанию берутся из config.py, env может перекрыть любое поле."""

    sepolia_rpc: str = config.SEPOLIA_RPC
    t1_rpc: str = config.T1_RPC
    min_amount: Decimal = config.MIN_AMOUNT
    max_amount: Decimal = config.MAX_AMOUNT
    amount_decimals: int = config.AMOUNT_DECIMALS
    outbound_value_buffer: Decimal = config.OUTBOUND_VALUE_BUFFER
    max_bridges_per_day: int = config.MAX_BRIDGES_PER_DAY
    min_delay_ms: int = config.MIN_DELAY_MS
    max_delay_ms: int = config.MAX_DELAY_MS
    cycle_delay_ms: int = config.CYCLE_DELAY_MS
    retry_delay_ms: int = config.RETRY_DELAY_MS
    confirmation_timeout: int = config.CONFIRMATION_TIMEOUT
    max_consecutive_failures: int = config.MAX_CONSECUTIVE_FAILURES
    suspend_duration_ms: int = config.SUSPEND_DURATION_MS
    accounts_file: str = config.ACCOUNTS_FILE
    proxies_file: str = config.PROXIES_FILE
    log_file: str = config.LOG_FILE

    def __post_init__(self):
        for name in ('min_amount', 'max_amount', 'outbound_value_buffer'):
            if not Decimal(getattr(self, name)).is_finite():
                raise ConfigError(f'{name}: ожидается конечное число, получено {getattr(self, name)}')
        if self.outbound_value_buffer < 0:
            raise ConfigError(f'Отрицательный outbound_value_buffer: {self.outbound_value_buffer}')
        if self.min_amount <= 0 or self.min_amount > self.max_amount:
            raise ConfigError(f'Неверный диапазон сумм: {self.min_amount}..{self.max_amount}')
        if self.min_delay_ms < 0 or self.min_delay_ms > self.max_delay_ms:
            raise ConfigError(f'Неверный диапазон задержек: {self.min_delay_ms}..{self.max_delay_ms}')
        if self.max_bridges_per_day < 1:
            raise ConfigError('MAX_BRIDGES_PER_DAY должен быть >= 1')
        if self.max_consecutive_failures < 1:
            raise ConfigError('MAX_CONSECUTIVE_FAILURES должен быть >= 1')

    @property
    def sepolia(self) -> ChainConfig:
        return ChainConfig('Sepolia', self.sepolia_rpc, config.SEPOLIA_CHAIN_ID, eip1559=True)

    @property
    def t1(self) -> ChainConfig:
        return ChainConfig('T1', self.t1_rpc, config.T1_CHAIN_ID)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        if env is None:
            load_dotenv()
            env = os.environ

        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == '':
                continue
            try:
                if f.type in (int, 'int'):
                    overrides[f.name] = int(raw)
                elif f.type in (Decimal, 'Decimal'):
                    value = Decimal(raw)
                    if not value.is_finite():
                        raise ConfigError(f'{ENV_PREFIX}{f.name.upper()}: ожидается конечное число, получено {raw!r}')
                    overrides[f.name] = value
                else:
                    overrides[f.name] = raw.strip()
            except (ValueError, InvalidOperation):
                raise ConfigError(f'{ENV_PREFIX}{f.name.upper()}: не удалось разобрать {raw!r}')
        return cls(**overrides)
