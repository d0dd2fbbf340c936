"""Unit tests for chat_memory/utils/logging.py"""
from __future__ import annotations
import logging
import pytest


@pytest.fixture
def fresh_name(request):
    name = f"chat_memory.tests.{request.node.name}"
    yield name
    logging.getLogger(name).handlers.clear()


class TestGetLogger:

    def test_no_handler_when_root_is_configured(self, monkeypatch, fresh_name):
        from chat_memory.utils.logging import get_logger
        monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
        logger = get_logger(fresh_name)
        assert logger.handlers == []
        assert logger.propagate is True

    def test_stdout_handler_when_root_is_bare(self, monkeypatch, fresh_name):
        from chat_memory.utils.logging import get_logger
        monkeypatch.setattr(logging.getLogger(), "handlers", [])
        logger = get_logger(fresh_name)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_handler_not_duplicated(self, monkeypatch, fresh_name):
        from chat_memory.utils.logging import get_logger
        monkeypatch.setattr(logging.getLogger(), "handlers", [])
        get_logger(fresh_name)
        assert len(get_logger(fresh_name).handlers) == 1

    def test_level(self, fresh_name):
        from chat_memory.utils.logging import get_logger
        assert get_logger(fresh_name, level=logging.DEBUG).level == logging.DEBUG
