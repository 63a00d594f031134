"""Command-line flags and the configuration they point at."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional

from chainbox.config import Config, ConfigError, load_config

APP_NAME = "sandbox"
DEFAULT_CONFIG_FILE = "configs/dev.yaml"

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


class EnvironmentError_(Exception):
    """Raised when the flags cannot be parsed or the configuration loaded."""


@dataclass
class Env:
    debug: bool = False
    config_file: str = DEFAULT_CONFIG_FILE
    config: Optional[Config] = None


def _flag_error(message: str) -> EnvironmentError_:
    return EnvironmentError_(f"environment: can't parse flags: {message}")


def _parse_bool(name: str, value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise _flag_error(f'invalid boolean value "{value}" for -{name}: parse error')


def parse_args(args: Iterable[str]) -> Env:
    """Parse ``-d`` (debug) and ``-c <file>`` (config path); parsing stops at the first non-flag."""
    env = Env()
    pending = deque(args)
    while pending:
        arg = pending[0]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        pending.popleft()
        name = arg[1:]
        if name.startswith("-"):
            name = name[1:]
            if not name:
                break
        if not name or name[0] in "-=":
            raise _flag_error(f"bad flag syntax: {arg}")
        name, eq, value = name.partition("=")
        has_value = bool(eq)

        if name == "d":
            env.debug = _parse_bool(name, value) if has_value else True
        elif name == "c":
            if not has_value:
                if not pending:
                    raise _flag_error(f"flag needs an argument: -{name}")
                value = pending.popleft()
            env.config_file = value
        elif name in ("h", "help"):
            raise _flag_error("flag: help requested")
        else:
            raise _flag_error(f"flag provided but not defined: -{name}")
    return env


def load_environment(args: Iterable[str]) -> Env:
    """Parse the flags and load the configuration file they name."""
    env = parse_args(args)
    try:
        env.config = load_config(env.config_file)
    except ConfigError as exc:
        raise EnvironmentError_(f"environment: can't create config: {exc}") from exc
    return env