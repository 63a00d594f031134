"""Background observers that consume messages from a channel."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from chainbox.messages import Channel, ChannelClosed, Data, recovered

OBSERVER_CAPACITY = 1000
_POLL_INTERVAL = 0.05


class Observer:
    """Consumes messages on a worker thread and hands each to ``handle``."""

    def __init__(
        self,
        name: str,
        logger: logging.Logger,
        handle: Optional[Callable[[Data], None]] = None,
    ) -> None:
        self.name = name + "Observer"
        self.channel: Channel[Data] = Channel(OBSERVER_CAPACITY)
        self._logger = logger
        self._handle = handle or (lambda msg: None)
        self._thread: Optional[threading.Thread] = None

    def observe(self, stop_event: threading.Event) -> None:
        """Start consuming in the background until ``stop_event`` is set and the channel closed."""
        self._thread = threading.Thread(
            target=self._observe, args=(stop_event,), name=self.name, daemon=True
        )
        self._thread.start()

    @recovered
    def _observe(self, stop_event: threading.Event) -> None:
        self._logger.info("%s started.", self.name)
        while not stop_event.is_set():
            try:
                msg = self.channel.get(timeout=_POLL_INTERVAL)
            except TimeoutError:
                continue
            except ChannelClosed:
                stop_event.wait()
                break
            self._handle(msg)
        for msg in self.channel:
            self._handle(msg)

    def stop(self) -> None:
        """Close the channel and wait for the remaining messages to be handled."""
        self._logger.warning("%s stopping...", self.name)
        self.channel.close()
        if self._thread is not None:
            self._thread.join()
        self._logger.warning("%s stopped", self.name)


def error_observer(logger: logging.Logger) -> Observer:
    """An observer that logs every message it receives as an error."""
    return Observer("Error", logger, lambda msg: logger.error("%s", msg.value))