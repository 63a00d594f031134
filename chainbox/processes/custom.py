"""Concrete processes that chains are assembled from, and the factory naming them."""

from __future__ import annotations

import logging
import time
from random import randrange
from typing import Callable, Dict, Optional

from chainbox.config import ProcessesSettings
from chainbox.messages import Channel, Data
from chainbox.processes.base import Emitter, Filter, Process, Reader, Sender


class CustomEmitter(Emitter):
    """Emits a random integer in [0, 100) every ``interval`` seconds."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Custom", settings, logger)


class CustomFilter(Filter):
    """Lets through integers greater than the configured minimum value."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Custom", settings, logger)
        filter_settings = settings.custom_filter_setting
        self.output = Channel(filter_settings.common.size)
        self.min_value = filter_settings.min_value

    def accept(self, msg: Data) -> bool:
        value = msg.value
        if isinstance(value, int) and not isinstance(value, bool):
            return value > self.min_value
        return False


class CustomReader(Reader):
    """Reads random integers in [0, 100) and logs each commit."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Custom", settings, logger)

    def fetch(self) -> Data:
        time.sleep(self.interval)
        self.logger.info("Fetching")
        return Data(randrange(100))

    def commit(self, msg: Data, errors: Channel[Data]) -> None:
        self.logger.info("Commiting")


class CustomSender(Sender):
    """Logs every message it sends."""

    def __init__(
        self, name: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        super().__init__(name + "Custom", settings, logger)

    def handle(self, msg: Data, errors: Channel[Data]) -> None:
        self.logger.info("%s Custom Send: %s", self.name, msg.value)


class ProcessCreator:
    """Creates the known processes, each named after the given prefix."""

    def __init__(
        self, prefix: str, settings: ProcessesSettings, logger: logging.Logger
    ) -> None:
        self.prefix = prefix
        self.settings = settings
        self.logger = logger
        self._kinds: Dict[str, Callable[[], Process]] = {
            "CustomEmitter": self.get_custom_emitter,
            "CustomSender": self.get_custom_sender,
            "CustomFilter": self.get_custom_filter,
            "CustomReader": self.get_custom_reader,
        }

    def get_custom_emitter(self) -> Process:
        return CustomEmitter(self.prefix, self.settings, self.logger)

    def get_custom_sender(self) -> Process:
        return CustomSender(self.prefix, self.settings, self.logger)

    def get_custom_filter(self) -> Process:
        return CustomFilter(self.prefix, self.settings, self.logger)

    def get_custom_reader(self) -> Process:
        return CustomReader(self.prefix, self.settings, self.logger)

    def create(self, kind: str) -> Optional[Process]:
        """Create the process called ``kind``, or return None if it is unknown."""
        factory = self._kinds.get(kind)
        return factory() if factory is not None else None