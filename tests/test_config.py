import logging

import pytest

from resume_parsing.config import _int_env, configure_logging


def test_int_env(monkeypatch):
    monkeypatch.delenv("RESUME_PARSER_TEST_LIMIT", raising=False)
    assert _int_env("RESUME_PARSER_TEST_LIMIT", 42) == 42

    monkeypatch.setenv("RESUME_PARSER_TEST_LIMIT", "500")
    assert _int_env("RESUME_PARSER_TEST_LIMIT", 42) == 500

    monkeypatch.setenv("RESUME_PARSER_TEST_LIMIT", "lots")
    with pytest.raises(ValueError):
        _int_env("RESUME_PARSER_TEST_LIMIT", 42)

    monkeypatch.setenv("RESUME_PARSER_TEST_LIMIT", "0")
    with pytest.raises(ValueError):
        _int_env("RESUME_PARSER_TEST_LIMIT", 42)


def test_configure_logging_is_idempotent():
    logger = logging.getLogger("resume_parsing")
    before = list(logger.handlers)
    try:
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 1
        assert logger.level == logging.DEBUG
    finally:
        for h in logger.handlers[:]:
            if h not in before:
                logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
