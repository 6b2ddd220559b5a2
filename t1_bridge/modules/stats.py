from loguru import logger

from t1_bridge.models import BridgeAttempt, Direction, Outcome, Stats, utc_now
from t1_bridge.utils.logger import highlight


def add_attempt(stats: Stats, attempt: BridgeAttempt):
    direction_stats = stats[attempt.direction]
    direction_stats.attempts += 1
    direction_stats.total_duration += attempt.duration

    if attempt.outcome is Outcome.SUCCESS:
        direction_stats.successes += 1
        direction_stats.total_amount += attempt.amount
    else:
        direction_stats.failures += 1
        if attempt.outcome is Outcome.TIMEOUT:
            direction_stats.timeouts += 1


def format_uptime(stats: Stats, now=None):
    now = now or utc_now()
    duration = int((now - stats.start_time).total_seconds())
    hours, rest = divmod(duration, 3600)
    minutes, seconds = divmod(rest, 60)
    return f'{hours}h {minutes}m {seconds}s'


def display_stats(stats: Stats, now=None):
    highlight(f'🔄 BRIDGE BOT STATISTICS - Running for {format_uptime(stats, now)}')
    for direction in Direction:
        s = stats[direction]
        average = s.total_duration / s.attempts if s.attempts else 0
        logger.info(
            f'{direction.label}: {s.successes}/{s.attempts} '
            f'(ошибок {s.failures}, из них таймаутов {s.timeouts}, среднее время {average:.1f}s)'
        )
    logger.info(f'Total ETH bridged: {stats[Direction.SEPOLIA_TO_T1].total_amount:.4f}')
