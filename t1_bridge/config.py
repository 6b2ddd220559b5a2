from decimal import Decimal

from web3 import Web3

# RPC эндпоинты
SEPOLIA_RPC = 'https://ethereum-sepolia.publicnode.com'
T1_RPC = 'https://rpc.v006.t1protocol.com'

SEPOLIA_CHAIN_ID = 11155111
T1_CHAIN_ID = 299792

# Адреса контрактов моста
SEPOLIA_TO_T1_BRIDGE = Web3.to_checksum_address('0xAFdF5cb097D6FB2EB8B1FFbAB180e667458e18F4')
T1_TO_SEPOLIA_BRIDGE = Web3.to_checksum_address('0x627B3692969b7330b8Faed2A8836A41EB4aC1918')

SEND_MESSAGE_SIGNATURE = 'sendMessage(address,uint256,bytes,uint256,uint64,address)'

# Газ
TX_GAS_LIMIT = 300000
OUTBOUND_MESSAGE_GAS_LIMIT = 168000
INBOUND_MESSAGE_GAS_LIMIT = 0
# Добавляется к value только при отправке Sepolia -> T1
OUTBOUND_VALUE_BUFFER = Decimal('0.0001')

# Суммы (в ETH)
MIN_AMOUNT = Decimal('0.0002')
MAX_AMOUNT = Decimal('0.01')
AMOUNT_DECIMALS = 6

# Лимиты и задержки
MAX_BRIDGES_PER_DAY = 5
MIN_DELAY_MS = 5 * 60 * 1000  # 5 минут
MAX_DELAY_MS = 25 * 60 * 1000  # 25 минут
CYCLE_DELAY_MS = 20 * 60 * 60 * 1000  # 20 часов
RETRY_DELAY_MS = 5 * 60 * 1000
CONFIRMATION_TIMEOUT = 120  # секунд

# Сколько неудач подряд до временной заморозки аккаунта
MAX_CONSECUTIVE_FAILURES = 3
SUSPEND_DURATION_MS = 6 * 60 * 60 * 1000

# Файлы
ACCOUNTS_FILE = 'txt_files/accounts.txt'
PROXIES_FILE = 'txt_files/proxy.txt'
LOG_FILE = 'bridge_log.txt'
