"""YAML configuration of the sandbox: log level, process settings and chains."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or decoded."""


_SYNTAX = "config: invalid config syntax: "


def _mapping(data: Any, where: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"{_SYNTAX}{where}: expected a mapping")
    return data


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{_SYNTAX}{key}: expected an integer, got {value!r}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"{_SYNTAX}{key}: expected a string, got {value!r}")
    return value


@dataclass
class CommonProcessSetting:
    size: int = 0

    @classmethod
    def _from_mapping(cls, data: Any) -> "CommonProcessSetting":
        return cls(size=_int(_mapping(data, "common"), "size"))


@dataclass
class CustomFilterSetting:
    common: CommonProcessSetting = field(default_factory=CommonProcessSetting)
    min_value: int = 0

    @classmethod
    def _from_mapping(cls, data: Any) -> "CustomFilterSetting":
        section = _mapping(data, "customFilterSetting")
        return cls(
            common=CommonProcessSetting._from_mapping(section.get("common")),
            min_value=_int(section, "minValue"),
        )


@dataclass
class ProcessesSettings:
    common: CommonProcessSetting = field(default_factory=CommonProcessSetting)
    custom_filter_setting: CustomFilterSetting = field(
        default_factory=CustomFilterSetting
    )

    @classmethod
    def _from_mapping(cls, data: Any) -> "ProcessesSettings":
        section = _mapping(data, "processesSettings")
        return cls(
            common=CommonProcessSetting._from_mapping(section.get("common")),
            custom_filter_setting=CustomFilterSetting._from_mapping(
                section.get("customFilterSetting")
            ),
        )


@dataclass
class ChainConfig:
    name: str = ""
    processes: list[str] = field(default_factory=list)

    @classmethod
    def _from_mapping(cls, data: Any) -> "ChainConfig":
        section = _mapping(data, "chains")
        processes = section.get("processes") or []
        if not isinstance(processes, list) or not all(
            isinstance(p, str) for p in processes
        ):
            raise ConfigError(f"{_SYNTAX}processes: expected a list of strings")
        return cls(name=_str(section, "name"), processes=list(processes))


@dataclass
class Config:
    log_level: str = ""
    processes_settings: ProcessesSettings = field(default_factory=ProcessesSettings)
    chains: list[ChainConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a configuration from decoded YAML; missing keys get zero values."""
        if data is None:
            raise ConfigError(f"{_SYNTAX}EOF")
        section = _mapping(data, "document")
        chains = section.get("chains") or []
        if not isinstance(chains, list):
            raise ConfigError(f"{_SYNTAX}chains: expected a list")
        return cls(
            log_level=_str(section, "logLevel"),
            processes_settings=ProcessesSettings._from_mapping(
                section.get("processesSettings")
            ),
            chains=[ChainConfig._from_mapping(chain) for chain in chains],
        )


def load_config(path: str) -> Config:
    """Read and decode the YAML configuration file at ``path``."""
    try:
        with open(path, encoding="utf-8") as stream:
            try:
                data = yaml.safe_load(stream)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{_SYNTAX}{exc}") from exc
    except OSError as exc:
        raise ConfigError(f"config: failed to open config file: {exc}") from exc
    return Config.from_dict(data)