import asyncio
import logging
import sys

from loguru import logger

from t1_bridge.context import BotContext
from t1_bridge.errors import ConfigError
from t1_bridge.modules.accounts import load_accounts, load_proxies
from t1_bridge.modules.scheduler import BridgeScheduler
from t1_bridge.settings import Settings
from t1_bridge.utils.logger import setup_logger

logging.getLogger('asyncio').setLevel(logging.CRITICAL)


async def main():
    settings = Settings.from_env()
    setup_logger(settings.log_file)

    accounts = load_accounts(settings.accounts_file)
    proxies = load_proxies(settings.proxies_file)
    if proxies:
        logger.info(f'Загружено прокси: {len(proxies)}')

    ctx = BotContext(settings=settings, accounts=accounts, proxies=proxies)
    await BridgeScheduler(ctx).run_forever()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info('Процесс остановлен пользователем.')
        return 0
    except ConfigError as e:
        logger.error(f'🔴 {e}')
        return 1
    except Exception as e:
        logger.exception(f'🔴 Fatal error: {e}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(run())
