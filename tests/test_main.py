from unittest.mock import MagicMock

import pytest

from t1_bridge import main as entry
from t1_bridge.errors import ConfigError


@pytest.fixture
def fake_run(monkeypatch):
    run = MagicMock()
    monkeypatch.setattr(entry, 'main', MagicMock())
    monkeypatch.setattr(entry.asyncio, 'run', run)
    return run


@pytest.mark.parametrize('error, code, level', [
    (KeyboardInterrupt(), 0, 'INFO'),
    (ConfigError('No accounts found in txt_files/accounts.txt'), 1, 'ERROR'),
    (RuntimeError('loop crashed'), 1, 'ERROR'),
])
def test_exit_codes(fake_run, log_records, error, code, level):
    fake_run.side_effect = error

    assert entry.run() == code
    assert log_records[-1]['level'].name == level


def test_fatal_error_is_logged_with_traceback(fake_run, log_records):
    fake_run.side_effect = RuntimeError('loop crashed')

    entry.run()

    assert log_records[-1]['exception'] is not None


def test_normal_return_is_zero(fake_run):
    assert entry.run() == 0
    fake_run.assert_called_once()
