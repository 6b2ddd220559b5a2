from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from t1_bridge.models import Account, AccountState, Direction
from t1_bridge.modules.bridge import bridge
from t1_bridge.modules.stats import display_stats
from t1_bridge.utils.logger import highlight
from t1_bridge.utils.web3_helper import get_working_proxy

RESET_PERIOD = timedelta(hours=24)


class BridgeScheduler:
    """Дневной лимит на аккаунт, случайные суммы и паузы, бесконечный цикл по аккаунтам.

    Счетчик bridge_count растет только после успешного бриджа и сбрасывается лениво:
    при первой проверке после 24 часов с прошлого сброса. После
    max_consecutive_failures неудач подряд аккаунт замораживается на suspend_duration_ms.
    """

    def __init__(self, ctx):
        self.ctx = ctx
        self.settings = ctx.settings

    @property
    def daily_limit(self) -> int:
        return self.settings.max_bridges_per_day

    def is_eligible(self, account: Account, now) -> bool:
        if account.last_reset is None or now - account.last_reset >= RESET_PERIOD:
            account.bridge_count = 0
            account.last_reset = now
        return account.bridge_count < self.daily_limit

    def is_suspended(self, account: Account, now) -> bool:
        if account.suspended_until is None:
            return False
        if now >= account.suspended_until:
            account.suspended_until = None
            account.consecutive_failures = 0
            return False
        return True

    def begin_attempt(self, account: Account):
        account.state = AccountState.ATTEMPTING

    def record_attempt(self, account: Account, success: bool, now=None):
        now = now or self.ctx.clock()
        if success:
            account.state = AccountState.SUCCEEDED
            account.consecutive_failures = 0
            if account.bridge_count < self.daily_limit:
                account.bridge_count += 1
            return

        account.state = AccountState.FAILED
        account.consecutive_failures += 1
        if account.consecutive_failures >= self.settings.max_consecutive_failures:
            account.suspended_until = now + timedelta(milliseconds=self.settings.suspend_duration_ms)
            logger.warning(
                f'⛔ {account.address}: {account.consecutive_failures} неудач подряд, '
                f'аккаунт заморожен до {account.suspended_until.isoformat()}'
            )

    def pick_amount(self) -> Decimal:
        low, high = self.settings.min_amount, self.settings.max_amount
        raw = Decimal(str(self.ctx.rng.uniform(float(low), float(high))))
        amount = raw.quantize(Decimal(1).scaleb(-self.settings.amount_decimals), rounding=ROUND_HALF_UP)
        return min(max(amount, low), high)

    def pick_delay(self) -> int:
        return self.ctx.rng.randint(self.settings.min_delay_ms, self.settings.max_delay_ms)

    async def pause(self, delay_ms, reason):
        logger.info(f'⏱️ Waiting {delay_ms / 60000:.2f} minutes before {reason}...')
        await self.ctx.sleep(delay_ms / 1000)

    def can_continue(self, account: Account) -> bool:
        if account.bridge_count >= self.daily_limit:
            return False
        return not self.is_suspended(account, self.ctx.clock())

    async def run_leg(self, account: Account, direction: Direction, amount, proxy=None) -> bool:
        self.begin_attempt(account)
        attempt = await bridge(self.ctx, account, direction, amount, proxy)
        self.record_attempt(account, attempt.success, self.ctx.clock())
        account.state = AccountState.IDLE
        return attempt.success

    async def process_account(self, account: Account, is_last: bool):
        highlight(f'🔄 Processing account: {account.address}')
        now = self.ctx.clock()

        if self.is_suspended(account, now):
            logger.warning(f'⛔ Account {account.address} заморожен до {account.suspended_until.isoformat()}, пропускаем')
            return
        if not self.is_eligible(account, now):
            logger.warning(f'⏳ Account {account.address} reached daily limit of {self.daily_limit} bridges')
            return

        proxy = None
        if self.ctx.proxies:
            proxy = await get_working_proxy(self.ctx, self.settings.sepolia)

        for i in range(self.daily_limit):
            if not self.can_continue(account):
                break

            amount = self.pick_amount()

            await self.run_leg(account, Direction.SEPOLIA_TO_T1, amount, proxy)
            if not self.can_continue(account):
                logger.warning(f'⏳ {account.address}: обратный бридж пропущен (лимит или заморозка)')
                break
            await self.pause(self.pick_delay(), 'next transaction')

            await self.run_leg(account, Direction.T1_TO_SEPOLIA, amount, proxy)

            if i < self.daily_limit - 1 or not is_last:
                await self.pause(self.pick_delay(), 'next bridge')

        if account.suspended_until is not None:
            logger.warning(
                f'⛔ Account {account.address} остановлен заморозкой. Total today: {account.bridge_count}'
            )
            return
        logger.success(f'✅ Completed bridges for account {account.address}. Total today: {account.bridge_count}')

    async def run_cycle(self):
        accounts = self.ctx.accounts
        for index, account in enumerate(accounts):
            await self.process_account(account, index == len(accounts) - 1)

    async def run_forever(self):
        highlight(f'🤖 Starting multi-account bridge bot with {len(self.ctx.accounts)} accounts')

        while True:
            try:
                await self.run_cycle()
            except Exception as e:
                backoff = self.settings.retry_delay_ms * 2
                logger.exception(f'🔴 Ошибка в цикле: {e}. Повтор через {backoff / 60000:.0f} минут')
                await self.ctx.sleep(backoff / 1000)
                continue

            display_stats(self.ctx.stats, self.ctx.clock())
            highlight(
                f'⏱️ All accounts processed. Waiting '
                f'{self.settings.cycle_delay_ms / (60 * 60 * 1000):g} hours before next cycle...'
            )
            await self.ctx.sleep(self.settings.cycle_delay_ms / 1000)
