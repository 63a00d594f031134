import logging
import threading

import pytest

from chainbox.config import (
    ChainConfig,
    CommonProcessSetting,
    CustomFilterSetting,
    ProcessesSettings,
)
from chainbox.messages import Channel, Data
from chainbox.processes.base import Process
from chainbox.processes.chain import Builder, Chain, Handler
from chainbox.processes.custom import CustomFilter, CustomReader


@pytest.fixture
def settings():
    return ProcessesSettings(
        common=CommonProcessSetting(size=4),
        custom_filter_setting=CustomFilterSetting(
            common=CommonProcessSetting(size=4), min_value=50
        ),
    )


@pytest.fixture
def logger():
    return logging.getLogger("chainbox-chain-test")


def test_handler_passes_output_to_next(settings, logger):
    first = Process("first", settings, logger)
    second = Process("second", settings, logger)
    handler = Handler(first, Handler(second))
    stop = threading.Event()
    errors = Channel(10)
    source = Channel(4)

    handler.next(stop, errors, source)
    source.put(Data(7))
    received = second.output.get(timeout=5)

    stop.set()
    source.close()
    first.stop(errors)
    second.stop(errors)

    assert received == Data(7)
    assert first.output.closed
    assert second.output.closed


def test_handler_without_next_runs_only_its_process(settings, logger):
    only = Process("only", settings, logger)
    handler = Handler(only)
    stop = threading.Event()
    errors = Channel(10)
    source = Channel(4)

    handler.next(stop, errors, source)
    source.put(Data("x"))
    assert only.output.get(timeout=5) == Data("x")

    stop.set()
    source.close()
    only.stop(errors)
    assert only.output.closed


def test_chain_filters_reader_output(settings, logger):
    reader = CustomReader("t", settings, logger)
    reader.interval = 0.005
    filt = CustomFilter("t", settings, logger)
    tail = Process("tail", settings, logger)
    chain = Chain("t", [reader, filt, tail])
    stop = threading.Event()
    errors = Channel(100)

    chain.run(stop, errors)
    received = [tail.output.get(timeout=10) for _ in range(5)]

    drainer = threading.Thread(target=lambda: list(tail.output), daemon=True)
    drainer.start()
    stop.set()
    chain.stop(errors)
    drainer.join(5)

    assert all(msg.value > 50 for msg in received)
    assert all(p.output.closed for p in chain.processes)


def test_chain_stop_closes_every_output(settings, logger):
    processes = [Process(name, settings, logger) for name in ("a", "b", "c")]
    chain = Chain("c", processes)
    stop = threading.Event()
    errors = Channel(10)

    chain.run(stop, errors)
    stop.set()
    chain.stop(errors)

    assert [p.output.closed for p in processes] == [True, True, True]


def test_empty_chain_cannot_run():
    chain = Chain("empty", [])
    with pytest.raises(ValueError):
        chain.run(threading.Event(), Channel(1))


def test_builder_names_processes_after_chain(settings, logger):
    builder = Builder(settings, logger)
    chain = builder.build(
        ChainConfig(name="x", processes=["CustomFilter", "Unknown", "CustomSender"])
    )
    assert chain.name == "x"
    assert [p.name for p in chain.processes] == ["xCustomFilter", "xCustomSender"]


def test_builder_skips_unknown_processes(settings, logger):
    builder = Builder(settings, logger)
    chain = builder.build(ChainConfig(name="y", processes=["Nope", "AlsoNope"]))
    assert chain.processes == []
    with pytest.raises(ValueError):
        chain.run(threading.Event(), Channel(1))


def test_builder_applies_filter_settings(settings, logger):
    chain = Builder(settings, logger).build(
        ChainConfig(name="z", processes=["CustomFilter"])
    )
    (filt,) = chain.processes
    assert filt.min_value == 50
    assert filt.accept(Data(51)) is True
    assert filt.accept(Data(50)) is False