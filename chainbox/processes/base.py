"""Building blocks of a chain: generic processes, emitters, filters, readers and senders."""

from __future__ import annotations

import logging
import threading
import time
from random import randrange
from typing import Any, Callable, List, Optional

from chainbox.config import ProcessesSettings
from chainbox.messages import Channel, ChannelClosed, Data, recovered

COMMIT_CAPACITY = 10000
_POLL_INTERVAL = 0.05


class Process:
    """A stage of a chain that reads from a source channel and writes to its output."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        self.name = name
        self.settings = settings
        self.logger = logger
        self.output: Channel[Data] = Channel(settings.common.size)
        self._threads: List[threading.Thread] = []

    def run(
        self,
        stop_event: threading.Event,
        errors: Channel[Data],
        source: Optional[Channel[Data]] = None,
    ) -> Channel[Data]:
        """Start the process in the background and return its output channel."""
        self._start(self._run, stop_event, errors, source)
        return self.output

    def stop(self, errors: Optional[Channel[Data]] = None) -> None:
        """Wait until every worker of the process has finished."""
        self.logger.warning("%s stopping...", self.name)
        for thread in self._threads:
            thread.join()
        self.logger.warning("%s stopped", self.name)

    def handle(self, msg: Data, errors: Channel[Data]) -> None:
        """Pass the message on to the output channel."""
        self.output.put(msg)

    def _start(self, target: Callable[..., Any], *args: Any) -> None:
        thread = threading.Thread(
            target=recovered(target), args=args, name=self.name, daemon=True
        )
        self._threads.append(thread)
        thread.start()

    def _dispatch(self, msg: Data, errors: Channel[Data]) -> None:
        recovered(self.handle)(msg, errors)

    def _run(
        self,
        stop_event: threading.Event,
        errors: Channel[Data],
        source: Optional[Channel[Data]],
    ) -> None:
        self.logger.info("%s started.", self.name)
        try:
            if source is None:
                stop_event.wait()
                return
            while not stop_event.is_set():
                try:
                    msg = source.get(timeout=_POLL_INTERVAL)
                except TimeoutError:
                    continue
                except ChannelClosed:
                    stop_event.wait()
                    break
                self._dispatch(msg, errors)
            for msg in source:
                self._dispatch(msg, errors)
        finally:
            self.output.close()


class Emitter(Process):
    """Produces a message every ``interval`` seconds, ignoring any source."""

    interval: float = 1.0

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Emitter", settings, logger)

    def emit(self) -> Data:
        """Produce the next message: a random integer in [0, 100)."""
        return Data(randrange(100))

    def _run(
        self,
        stop_event: threading.Event,
        errors: Channel[Data],
        source: Optional[Channel[Data]],
    ) -> None:
        self.logger.info("%s started.", self.name)
        try:
            while not stop_event.is_set():
                time.sleep(self.interval)
                self.output.put(self.emit())
        finally:
            self.output.close()


class Filter(Process):
    """Forwards only the messages that ``accept`` lets through."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Filter", settings, logger)

    def accept(self, msg: Data) -> bool:
        """Decide whether a message goes on; every message does by default."""
        return True

    def handle(self, msg: Data, errors: Channel[Data]) -> None:
        if self.accept(msg):
            self.output.put(msg)


class Reader(Process):
    """Fetches messages from an outside source and commits each one it passed on."""

    interval: float = 1.0

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Reader", settings, logger)
        self.commit_channel: Channel[Data] = Channel(COMMIT_CAPACITY)

    def fetch(self) -> Data:
        """Fetch the next message; an exception is reported on the error channel."""
        time.sleep(self.interval)
        return Data(51)

    def commit(self, msg: Data, errors: Channel[Data]) -> None:
        """Acknowledge a message that was passed on; nothing to do by default."""

    def run(
        self,
        stop_event: threading.Event,
        errors: Channel[Data],
        source: Optional[Channel[Data]] = None,
    ) -> Channel[Data]:
        self._start(self._fetch_loop, stop_event, errors)
        self._start(self._commit_loop, errors)
        return self.output

    def _fetch_loop(self, stop_event: threading.Event, errors: Channel[Data]) -> None:
        self.logger.info("%s fetch started.", self.name)
        try:
            while not stop_event.is_set():
                try:
                    msg = self.fetch()
                except Exception as exc:  # noqa: BLE001 - reported, not fatal
                    errors.put(Data(exc))
                    continue
                self.output.put(msg)
                self.commit_channel.put(msg)
        finally:
            self.output.close()
            self.commit_channel.close()

    def _commit_loop(self, errors: Channel[Data]) -> None:
        self.logger.info("%s commit started.", self.name)
        for msg in self.commit_channel:
            recovered(self.commit)(msg, errors)


class Sender(Process):
    """Delivers every message to another service instead of passing it on."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Sender", settings, logger)

    def handle(self, msg: Data, errors: Channel[Data]) -> None:
        print("Send to another service: ", msg.value)