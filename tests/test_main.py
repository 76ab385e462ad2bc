import logging

import pytest

pytest.importorskip("tkinter")

import main  # noqa: E402


@pytest.fixture
def root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def test_setup_logging_level_from_env(monkeypatch, root_level):
    monkeypatch.setenv("CALC_LOG_LEVEL", "debug")
    main.setup_logging()
    assert root_level.level == logging.DEBUG


def test_setup_logging_unknown_level_falls_back(root_level):
    main.setup_logging("NOPE")
    assert root_level.level == logging.INFO
