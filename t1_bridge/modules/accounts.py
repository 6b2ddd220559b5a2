from eth_account import Account as EthAccount
from eth_utils import ValidationError
from loguru import logger

from t1_bridge.errors import ConfigError
from t1_bridge.models import Account


def parse_account_line(line):
    """Строка `address,key` или просто `key`. None для пустых строк и комментариев."""
    line = line.strip()
    if not line or line.startswith('#'):
        return None

    if ',' in line:
        address, private_key = (part.strip() for part in line.split(',', 1))
    else:
        address, private_key = None, line

    if not private_key:
        raise ValueError('пустой приватный ключ')

    derived = EthAccount.from_key(private_key).address
    if address and derived.lower() != address.lower():
        logger.warning(f"Warning: Address {address} doesn't match private key, используем {derived}")

    return Account(address=derived, private_key=private_key)


def load_accounts(path):
    try:
        with open(path, 'r', encoding='utf-8') as file:
            lines = file.readlines()
    except OSError as e:
        raise ConfigError(f'Не удалось прочитать {path}: {e}')

    accounts = []
    seen = set()
    for number, line in enumerate(lines, start=1):
        try:
            account = parse_account_line(line)
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f'{path}:{number}: неверный приватный ключ ({e}), строка пропущена')
            continue
        if account is None:
            continue
        if account.address in seen:
            logger.warning(f'{path}:{number}: {account.address} уже загружен, дубль пропущен')
            continue
        seen.add(account.address)
        accounts.append(account)

    if not accounts:
        raise ConfigError(f'No accounts found in {path}')

    logger.info(f'Загружено аккаунтов: {len(accounts)}')
    return accounts


def load_proxies(path):
    """Прокси необязательны: нет файла значит работаем без них."""
    try:
        with open(path, 'r', encoding='utf-8') as file:
            lines = (line.strip() for line in file)
            return [line for line in lines if line and not line.startswith('#')]
    except FileNotFoundError:
        return []
