import sys

from loguru import logger

from t1_bridge import config

HIGHLIGHT = 'HIGHLIGHT'

LOG_FORMAT = '<level>[{time:YYYY-MM-DDTHH:mm:ss.SSS!UTC}Z] {message}</level>'


def register_levels():
    try:
        logger.level(HIGHLIGHT)
    except ValueError:
        logger.level(HIGHLIGHT, no=22, color='<cyan>')


def setup_logger(log_file=config.LOG_FILE, console=sys.stdout):
    """Консоль с цветами и файл без цветов, формат один."""
    register_levels()
    logger.remove()  # Удаляем стандартный логгер

    logger.add(console, colorize=True, format=LOG_FORMAT, level='INFO')
    # Файл дописывается, ротация по 10 MB
    logger.add(log_file, colorize=False, format=LOG_FORMAT, level='INFO', rotation='10 MB', mode='a')


def highlight(message):
    logger.log(HIGHLIGHT, message)


register_levels()
