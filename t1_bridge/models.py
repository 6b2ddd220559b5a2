from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Direction(Enum):
    SEPOLIA_TO_T1 = 'sepolia_to_t1'
    T1_TO_SEPOLIA = 't1_to_sepolia'

    @property
    def label(self) -> str:
        return 'Sepolia→T1' if self is Direction.SEPOLIA_TO_T1 else 'T1→Sepolia'


class AccountState(Enum):
    IDLE = 'idle'
    ATTEMPTING = 'attempting'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


class Outcome(Enum):
    SUCCESS = 'success'
    FAILURE = 'failure'
    TIMEOUT = 'timeout'


@dataclass
class Account:
    address: str
    private_key: str
    bridge_count: int = 0
    last_reset: Optional[datetime] = None
    state: AccountState = AccountState.IDLE
    consecutive_failures: int = 0
    suspended_until: Optional[datetime] = None

    def __repr__(self):
        # ключ в логи не пишем
        return f'Account(address={self.address!r}, bridge_count={self.bridge_count})'


@dataclass(frozen=True)
class ChainConfig:
    name: str
    rpc_url: str
    chain_id: int
    eip1559: bool = False


@dataclass(frozen=True)
class Route:
    direction: Direction
    source: ChainConfig
    dest_chain_id: int
    bridge_address: str
    message_gas_limit: int
    value_buffer: Decimal
    tx_gas_limit: int


@dataclass
class BridgeAttempt:
    direction: Direction
    amount: Decimal
    outcome: Outcome
    tx_hash: Optional[str] = None
    duration: float = 0.0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.SUCCESS


@dataclass
class DirectionStats:
    attempts: int = 0
    successes: int = 0
    failures: int = 0
    timeouts: int = 0
    total_amount: Decimal = Decimal(0)
    total_duration: float = 0.0


@dataclass
class Stats:
    start_time: datetime = field(default_factory=utc_now)
    per_direction: Dict[Direction, DirectionStats] = field(
        default_factory=lambda: {direction: DirectionStats() for direction in Direction}
    )

    def __getitem__(self, direction: Direction) -> DirectionStats:
        return self.per_direction[direction]
