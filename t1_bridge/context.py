import asyncio
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from t1_bridge.models import Account, ChainConfig, Stats, utc_now
from t1_bridge.settings import Settings
from t1_bridge.utils.web3_helper import ChainClient


@dataclass
class BotContext:
    """Все, что нужно планировщику и мосту. Создается один раз в main."""

    settings: Settings
    accounts: List[Account]
    stats: Stats = field(default_factory=Stats)
    proxies: List[str] = field(default_factory=list)
    client_factory: Callable[[ChainConfig, Optional[str]], ChainClient] = ChainClient
    sleep: Callable = asyncio.sleep
    clock: Callable = utc_now
    rng: random.Random = field(default_factory=random.Random)
    _clients: Dict[Tuple[str, Optional[str]], ChainClient] = field(default_factory=dict, repr=False)

    def client_for(self, chain: ChainConfig, proxy=None):
        key = (chain.name, proxy)
        if key not in self._clients:
            self._clients[key] = self.client_factory(chain, proxy)
        return self._clients[key]
