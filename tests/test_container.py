import logging

import pytest

from chainbox.container import (
    INITIAL_FAILED,
    ContainerError,
    get_instance,
    make_logger,
    reset_instance,
)


@pytest.fixture(autouse=True)
def fresh_container():
    reset_instance()
    yield
    reset_instance()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("logLevel: info\n", encoding="utf-8")
    return str(path)


@pytest.mark.parametrize(
    "name, level",
    [
        ("info", logging.INFO),
        ("WARN", logging.WARNING),
        ("warning", logging.WARNING),
        ("error", logging.ERROR),
        ("debug", logging.DEBUG),
        ("bogus", logging.ERROR),
        ("", logging.ERROR),
    ],
)
def test_make_logger_levels(name, level):
    assert make_logger(name).level == level


def test_debug_overrides_level():
    assert make_logger("error", debug=True).level == logging.DEBUG


def test_logger_writes_to_stdout(capsys):
    logger = make_logger("info")
    logger.info("hello there")
    out = capsys.readouterr().out
    assert "hello there" in out
    assert "INFO" in out


def test_get_instance_builds_once(config_path):
    first = get_instance(["-c", config_path])
    second = get_instance()
    assert first is second
    assert first.env.config.log_level == "info"
    assert first.logger.level == logging.INFO


def test_get_instance_without_args_fails():
    with pytest.raises(ContainerError, match="^Container initial was failed"):
        get_instance()


def test_get_instance_wrong_type_fails():
    with pytest.raises(ContainerError) as info:
        get_instance("-d")
    assert str(info.value) == INITIAL_FAILED


def test_get_instance_bad_config(tmp_path):
    with pytest.raises(ContainerError) as info:
        get_instance(["-c", str(tmp_path / "absent.yaml")])
    assert str(info.value).startswith(INITIAL_FAILED + "[environment:")


def test_reset_allows_rebuild(config_path):
    first = get_instance(["-c", config_path])
    reset_instance()
    second = get_instance(["-d", "-c", config_path])
    assert first is not second
    assert second.env.debug is True
    assert second.logger.level == logging.DEBUG