import io
import re

from loguru import logger

from t1_bridge.utils.logger import highlight, setup_logger

LINE = re.compile(r'^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] (.*)$')


def test_console_colored_file_plain(tmp_path):
    log_file = tmp_path / 'bridge_log.txt'
    log_file.write_text('[old] line\n', encoding='utf-8')
    console = io.StringIO()

    try:
        setup_logger(str(log_file), console=console)
        logger.error('❌ T1→Sepolia Error: boom')
        highlight('🔄 Processing account')
        logger.complete()
    finally:
        logger.remove()

    lines = log_file.read_text(encoding='utf-8').splitlines()
    assert lines[0] == '[old] line'
    assert [LINE.match(line).group(1) for line in lines[1:]] == [
        '❌ T1→Sepolia Error: boom',
        '🔄 Processing account',
    ]
    assert '\x1b[' not in ''.join(lines)
    assert '\x1b[' in console.getvalue()
