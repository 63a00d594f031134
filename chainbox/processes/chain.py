"""Chains of processes: each stage feeds the output of the previous one."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from chainbox.config import ChainConfig, ProcessesSettings
from chainbox.messages import Channel, Data
from chainbox.processes.base import Process
from chainbox.processes.custom import ProcessCreator


class Handler:
    """Starts one process and hands its output on to the next handler."""

    def __init__(self, process: Process, next_handler: Optional["Handler"] = None) -> None:
        self.process = process
        self.next_handler = next_handler

    def next(
        self,
        stop_event: threading.Event,
        errors: Channel[Data],
        source: Optional[Channel[Data]] = None,
    ) -> None:
        """Run this handler's process on ``source`` and pass its output down the chain."""
        output = self.process.run(stop_event, errors, source)
        if self.next_handler is not None:
            self.next_handler.next(stop_event, errors, output)


class Chain:
    """A named sequence of processes linked output to input."""

    def __init__(self, name: str, processes: Iterable[Process]) -> None:
        self.name = name
        self.processes: List[Process] = list(processes)
        head: Optional[Handler] = None
        for process in reversed(self.processes):
            head = Handler(process, head)
        self._head = head

    def run(self, stop_event: threading.Event, errors: Channel[Data]) -> None:
        """Start every process of the chain; the first one has no source."""
        if self._head is None:
            raise ValueError(f"chain {self.name!r} has no processes")
        self._head.next(stop_event, errors, None)

    def stop(self, errors: Channel[Data]) -> None:
        """Wait for every process of the chain to finish, in order."""
        for process in self.processes:
            process.stop(errors)


class Builder:
    """Builds chains from their configuration, skipping unknown process names."""

    def __init__(self, settings: ProcessesSettings, logger: logging.Logger) -> None:
        self.settings = settings
        self.logger = logger

    def build(self, conf: ChainConfig) -> Chain:
        creator = ProcessCreator(conf.name, self.settings, self.logger)
        processes = [
            process
            for kind in conf.processes
            if (process := creator.create(kind)) is not None
        ]
        return Chain(conf.name, processes)