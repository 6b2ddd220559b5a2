class BridgeBotError(Exception):
    """Базовая ошибка бота."""


class ConfigError(BridgeBotError):
    """Нет файла аккаунтов, пустой список или кривая настройка."""


class NetworkError(BridgeBotError):
    """RPC недоступен или отвалился по таймауту."""


class ConfirmationTimeout(BridgeBotError):
    """Транзакция отправлена, но не подтвердилась вовремя."""

    def __init__(self, tx_hash, timeout):
        super().__init__(f'{tx_hash} не подтверждена за {timeout} сек')
        self.tx_hash = tx_hash
        self.timeout = timeout


class ChainRejection(BridgeBotError):
    """Receipt со статусом, отличным от 1."""

    def __init__(self, tx_hash, status):
        super().__init__(f'{tx_hash} завершилась со статусом {status}')
        self.tx_hash = tx_hash
        self.status = status


class InsufficientFunds(BridgeBotError):
    def __init__(self, address, balance_wei, required_wei):
        super().__init__(f'{address}: баланс {balance_wei} wei, нужно {required_wei} wei')
        self.address = address
        self.balance_wei = balance_wei
        self.required_wei = required_wei
