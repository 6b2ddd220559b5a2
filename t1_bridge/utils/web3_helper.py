import asyncio
import functools

import aiohttp
from eth_account import Account
from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ProviderConnectionError, TimeExhausted
from web3.middleware import ExtraDataToPOAMiddleware

from t1_bridge.errors import ConfirmationTimeout, NetworkError
from t1_bridge.models import ChainConfig


def get_async_web3(provider_url, proxy=None):
    web3 = AsyncWeb3(AsyncHTTPProvider(provider_url, request_kwargs={"proxy": proxy}))
    web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return web3


def rpc_call(func):
    """Сетевые ошибки RPC превращаем в NetworkError."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except (aiohttp.ClientError, asyncio.TimeoutError, ProviderConnectionError) as e:
            raise NetworkError(f'{self.chain.name} RPC: {e}') from e

    return wrapper


class ChainClient:
    """Обертка над AsyncWeb3 для одной сети."""

    def __init__(self, chain: ChainConfig, proxy=None):
        self.chain = chain
        self.proxy = proxy
        self.web3 = get_async_web3(chain.rpc_url, proxy)

    @rpc_call
    async def get_balance(self, address) -> int:
        return await self.web3.eth.get_balance(address)

    @rpc_call
    async def get_gas_price(self) -> int:
        return await self.web3.eth.gas_price

    @rpc_call
    async def get_fee_data(self) -> dict:
        priority_fee = await self.web3.eth.max_priority_fee
        block = await self.web3.eth.get_block('latest')
        base_fee = block['baseFeePerGas']
        return {
            'maxFeePerGas': base_fee * 2 + priority_fee,
            'maxPriorityFeePerGas': priority_fee,
        }

    @rpc_call
    async def send_transaction(self, private_key, to, value, data, gas_params) -> str:
        address = Account.from_key(private_key).address
        nonce = await self.web3.eth.get_transaction_count(address)

        transaction = {
            'from': address,
            'to': to,
            'value': value,
            'data': data,
            'nonce': nonce,
            'chainId': self.chain.chain_id,
            **gas_params,
        }

        signed_tx = self.web3.eth.account.sign_transaction(transaction, private_key=private_key)
        tx_hash = await self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
        return self.web3.to_hex(tx_hash)

    @rpc_call
    async def wait(self, tx_hash, timeout):
        try:
            return await self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        except TimeExhausted:
            raise ConfirmationTimeout(tx_hash, timeout)


async def get_working_proxy(ctx, chain: ChainConfig):
    """Ищет рабочий прокси среди ctx.proxies, None если ни один не ответил.

    Клиенты берутся через ctx.client_for, так что проверенный прокси потом
    переиспользуется мостом без нового соединения.
    """
    if not ctx.proxies:
        return None

    for _ in range(len(ctx.proxies) * 3):  # Пробуем каждый прокси несколько раз
        rand_proxy = ctx.rng.choice(ctx.proxies)
        client = ctx.client_for(chain, rand_proxy)
        try:
            if await client.web3.is_connected():
                return rand_proxy
            logger.warning(f'Прокси {rand_proxy} не работает.')
        except Exception as e:
            logger.warning(f'Прокси {rand_proxy} не работает: {e}')

    logger.error('Рабочих прокси не найдено, работаем напрямую')
    return None
