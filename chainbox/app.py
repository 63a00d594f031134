"""The sandbox application: builds the configured chains and runs them until stopped."""

from __future__ import annotations

import signal
import sys
import threading
from typing import List, Optional, Sequence

from chainbox.container import Container, ContainerError, get_instance
from chainbox.messages import Channel, Data, recovered
from chainbox.observer import error_observer
from chainbox.processes.chain import Builder, Chain

EXIT_SUCCESS = 0
EXIT_FAILURE = 3
VERSION = "version"

_STOP_SIGNALS = ("SIGHUP", "SIGINT", "SIGTERM", "SIGQUIT")
_SIGNAL_POLL = 0.5


def version() -> str:
    """The version the application was built as."""
    return VERSION


class Sandbox:
    """Owns the chains described by the container's configuration."""

    def __init__(self, container: Container) -> None:
        self.container = container
        self.chains: List[Chain] = []

    def run(self, stop_event: threading.Event, errors: Channel[Data]) -> None:
        """Build every configured chain and start them all."""
        config = self.container.env.config
        builder = Builder(config.processes_settings, self.container.logger)
        self.chains.extend(builder.build(conf) for conf in config.chains)
        for chain in self.chains:
            chain.run(stop_event, errors)

    def stop(self, errors: Channel[Data]) -> None:
        """Wait for every chain to finish."""
        for chain in self.chains:
            chain.stop(errors)


def _wait_for_os_signal() -> str:
    caught: List[int] = []
    arrived = threading.Event()

    def _on_signal(signum: int, frame: object) -> None:
        caught.append(signum)
        arrived.set()

    previous = {}
    for name in _STOP_SIGNALS:
        sig = getattr(signal, name, None)
        if sig is not None:
            previous[sig] = signal.signal(sig, _on_signal)
    try:
        while not arrived.wait(_SIGNAL_POLL):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return signal.Signals(caught[0]).name


def run(args: Sequence[str], stop_signal: Optional[threading.Event] = None) -> int:
    """Run the sandbox until ``stop_signal`` is set, or until a stop signal arrives.

    Returns the process exit code; a failed start is printed and reported as failure.
    """
    try:
        container = get_instance(list(args))
    except ContainerError as exc:
        print(exc)
        return EXIT_FAILURE

    logger = container.logger
    sandbox = Sandbox(container)
    stop_event = threading.Event()
    observer = error_observer(logger)
    observer.observe(stop_event)
    errors = observer.channel

    worker = threading.Thread(
        target=recovered(sandbox.run),
        args=(stop_event, errors),
        name="sandbox",
        daemon=True,
    )
    worker.start()

    if stop_signal is None:
        caught = _wait_for_os_signal()
    else:
        stop_signal.wait()
        caught = "stop"
    logger.info("Catch signal %s", caught)

    stop_event.set()
    worker.join()
    sandbox.stop(errors)
    observer.stop()
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else argv
    return run(args)


if __name__ == "__main__":
    sys.exit(main())