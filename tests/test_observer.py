import logging
import threading

import pytest

from chainbox.messages import ChannelClosed, Data
from chainbox.observer import Observer, error_observer


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected():
    logger = logging.Logger("observer-test", logging.DEBUG)
    handler = _Collect()
    logger.addHandler(handler)
    return logger, handler


def test_name_has_suffix(collected):
    logger, _ = collected
    assert Observer("Audit", logger).name == "AuditObserver"


def test_all_messages_handled_in_order(collected):
    logger, _ = collected
    seen = []
    obs = Observer("Collect", logger, seen.append)
    stop = threading.Event()
    obs.observe(stop)
    sent = [Data(n) for n in range(20)]
    for msg in sent:
        obs.channel.put(msg)
    stop.set()
    obs.stop()
    assert seen == sent


def test_messages_queued_before_stop_are_drained(collected):
    logger, _ = collected
    seen = []
    obs = Observer("Late", logger, seen.append)
    stop = threading.Event()
    stop.set()
    for n in range(5):
        obs.channel.put(Data(n))
    obs.observe(stop)
    obs.stop()
    assert [msg.value for msg in seen] == [0, 1, 2, 3, 4]


def test_stop_closes_channel_and_logs(collected):
    logger, handler = collected
    obs = Observer("Idle", logger)
    obs.stop()
    with pytest.raises(ChannelClosed):
        obs.channel.put(Data(1))
    messages = [r.getMessage() for r in handler.records]
    assert messages == ["IdleObserver stopping...", "IdleObserver stopped"]


def test_error_observer_logs_errors(collected):
    logger, handler = collected
    obs = error_observer(logger)
    assert obs.name == "ErrorObserver"
    stop = threading.Event()
    obs.observe(stop)
    obs.channel.put(Data(ValueError("broken pipe")))
    stop.set()
    obs.stop()
    errors = [r for r in handler.records if r.levelno == logging.ERROR]
    assert [r.getMessage() for r in errors] == ["broken pipe"]