"""Process-wide container holding the environment and the logger."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

from chainbox.environment import Env, EnvironmentError_, load_environment

INITIAL_FAILED = "Container initial was failed: "
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVELS = {
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


class ContainerError(Exception):
    """Raised when the container cannot be initialised."""


@dataclass
class Container:
    env: Env
    logger: logging.Logger


def make_logger(level_name: str, debug: bool = False) -> logging.Logger:
    """Build a stdout logger; unknown level names fall back to error, debug overrides."""
    level = _LEVELS.get(level_name.lower(), logging.ERROR)
    fmt = "[%(asctime)s] %(levelname)-8s %(message)s"
    if debug:
        level = logging.DEBUG
        fmt = "[%(asctime)s] %(levelname)-8s %(pathname)s:%(lineno)d %(funcName)s %(message)s"

    logger = logging.Logger("chainbox", level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt=TIMESTAMP_FORMAT))
    logger.addHandler(handler)
    return logger


_instance: Optional[Container] = None
_lock = threading.Lock()


def get_instance(args: Optional[Sequence[str]] = None) -> Container:
    """Return the shared container, creating it from ``args`` on first use."""
    global _instance
    with _lock:
        if _instance is not None:
            return _instance
        if args is None or isinstance(args, str):
            raise ContainerError(INITIAL_FAILED)
        if not isinstance(args, (list, tuple)) or not all(
            isinstance(a, str) for a in args
        ):
            raise ContainerError(INITIAL_FAILED)
        try:
            env = load_environment(args)
        except EnvironmentError_ as exc:
            raise ContainerError(f"{INITIAL_FAILED}[{exc}]") from exc
        logger = make_logger(env.config.log_level, env.debug)
        _instance = Container(env=env, logger=logger)
        return _instance


def reset_instance() -> None:
    """Forget the shared container so the next call builds a new one."""
    global _instance
    with _lock:
        _instance = None