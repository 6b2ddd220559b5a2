import time
from decimal import Decimal

from eth_abi import encode
from loguru import logger
from web3 import Web3

from t1_bridge import config
from t1_bridge.errors import ChainRejection, ConfirmationTimeout, InsufficientFunds
from t1_bridge.models import BridgeAttempt, Direction, Outcome, Route
from t1_bridge.modules.stats import add_attempt

SEND_MESSAGE_SELECTOR = Web3.keccak(text=config.SEND_MESSAGE_SIGNATURE)[:4]
SEND_MESSAGE_TYPES = ['address', 'uint256', 'bytes', 'uint256', 'uint64', 'address']


def get_route(settings, direction: Direction) -> Route:
    if direction is Direction.SEPOLIA_TO_T1:
        return Route(
            direction=direction,
            source=settings.sepolia,
            dest_chain_id=config.T1_CHAIN_ID,
            bridge_address=config.SEPOLIA_TO_T1_BRIDGE,
            message_gas_limit=config.OUTBOUND_MESSAGE_GAS_LIMIT,
            value_buffer=settings.outbound_value_buffer,
            tx_gas_limit=config.TX_GAS_LIMIT,
        )
    return Route(
        direction=direction,
        source=settings.t1,
        dest_chain_id=config.SEPOLIA_CHAIN_ID,
        bridge_address=config.T1_TO_SEPOLIA_BRIDGE,
        message_gas_limit=config.INBOUND_MESSAGE_GAS_LIMIT,
        value_buffer=Decimal(0),
        tx_gas_limit=config.TX_GAS_LIMIT,
    )


def encode_send_message(to, value_wei, gas_limit, dest_chain_id, callback):
    """Calldata для sendMessage, сообщение всегда пустое."""
    args = encode(
        SEND_MESSAGE_TYPES,
        [to, value_wei, b'', gas_limit, dest_chain_id, callback],
    )
    return Web3.to_hex(SEND_MESSAGE_SELECTOR + args)


async def get_gas_params(client, route: Route) -> dict:
    if route.source.eip1559:
        fee_data = await client.get_fee_data()
        return {'gas': route.tx_gas_limit, 'type': 2, **fee_data}
    return {'gas': route.tx_gas_limit, 'gasPrice': await client.get_gas_price()}


def max_gas_cost(gas_params: dict) -> int:
    price = gas_params.get('maxFeePerGas', gas_params.get('gasPrice', 0))
    return gas_params['gas'] * price


async def bridge(ctx, account, direction: Direction, amount: Decimal, proxy=None) -> BridgeAttempt:
    """Один перевод через мост. Исключения наружу не выпускает, итог в BridgeAttempt."""
    route = get_route(ctx.settings, direction)
    client = ctx.client_for(route.source, proxy)
    label = direction.label
    started = time.monotonic()
    tx_hash = None

    try:
        amount_wei = Web3.to_wei(amount, 'ether')
        value = amount_wei + Web3.to_wei(route.value_buffer, 'ether')
        data = encode_send_message(
            account.address,
            amount_wei,
            route.message_gas_limit,
            route.dest_chain_id,
            account.address,
        )

        gas_params = await get_gas_params(client, route)
        required = value + max_gas_cost(gas_params)
        balance = await client.get_balance(account.address)
        if balance < required:
            raise InsufficientFunds(account.address, balance, required)

        logger.info(f'{label}: {amount} ETH с {account.address} (баланс {Web3.from_wei(balance, "ether")} ETH)')
        tx_hash = await client.send_transaction(
            account.private_key, route.bridge_address, value, data, gas_params
        )
        logger.info(f'{label} транзакция отправлена: {tx_hash}')

        receipt = await client.wait(tx_hash, ctx.settings.confirmation_timeout)
        if receipt['status'] != 1:
            raise ChainRejection(tx_hash, receipt['status'])

        attempt = BridgeAttempt(direction, amount, Outcome.SUCCESS, tx_hash)
        logger.success(f'✅ {label} Success: {tx_hash} (блок {receipt["blockNumber"]})')
    except ConfirmationTimeout as e:
        attempt = BridgeAttempt(direction, amount, Outcome.TIMEOUT, tx_hash, error=str(e))
        logger.error(f'⌛ {label} Timeout: {e}')
    except Exception as e:
        attempt = BridgeAttempt(direction, amount, Outcome.FAILURE, tx_hash, error=str(e))
        logger.error(f'❌ {label} Error [{type(e).__name__}] для {account.address}: {e}')

    attempt.duration = time.monotonic() - started
    add_attempt(ctx.stats, attempt)
    return attempt
