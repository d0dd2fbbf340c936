"""Unit tests for chat_memory/memory/dialect.py"""
from __future__ import annotations
import pytest


class TestDialectFromUrl:

    @pytest.mark.parametrize("url, expected", [
        ("mssql+pyodbc://sa:pw@host/db", "SQLSERVER"),
        ("mssql+pymssql://host/db", "SQLSERVER"),
        ("jdbc:sqlserver://host:1433;databaseName=chat", "SQLSERVER"),
        ("jdbc:jtds:sqlserver://host/chat", "SQLSERVER"),
        ("postgresql+psycopg://u@host/db", "POSTGRESQL"),
        ("postgres://u@host/db", "POSTGRESQL"),
        ("jdbc:postgresql://host/db", "POSTGRESQL"),
        ("mysql+pymysql://u@host/db", "MYSQL"),
        ("mariadb+mariadbconnector://u@host/db", "MARIADB"),
        ("oracle+oracledb://u@host/db", "ORACLE"),
        ("jdbc:h2:mem:testdb", "H2"),
        ("jdbc:hsqldb:mem:testdb", "HSQLDB"),
        ("sqlite:///chat.db", "SQLITE"),
        ("MSSQL+PYODBC://HOST/DB", "SQLSERVER"),
    ])
    def test_known(self, url, expected):
        from chat_memory.memory.dialect import dialect_from_url
        assert dialect_from_url(url).name == expected

    @pytest.mark.parametrize("url", ["cockroachdb://host/db", "jdbc:derby:memory:x", "", None])
    def test_unknown_is_other(self, url):
        from chat_memory.memory.dialect import Dialect, dialect_from_url
        assert dialect_from_url(url) is Dialect.OTHER


class TestDetectDialect:

    def test_sqlite_engine(self, engine):
        from chat_memory.memory.dialect import Dialect, detect_dialect
        assert detect_dialect(engine) is Dialect.SQLITE

    def test_none_engine(self):
        from chat_memory.memory.dialect import detect_dialect
        from chat_memory.core.exceptions import ConfigError
        with pytest.raises(ConfigError):
            detect_dialect(None)

    def test_password_not_logged(self, caplog, mock_engine):
        import logging
        from chat_memory.memory.dialect import detect_dialect
        engine, _ = mock_engine("postgresql+psycopg://chat:hunter2@db/chat")
        with caplog.at_level(logging.INFO, logger="chat_memory.memory.dialect"):
            detect_dialect(engine)
        assert "POSTGRESQL" in caplog.text
        assert "hunter2" not in caplog.text

    def test_unreadable_url_is_config_error(self, mock_engine):
        from unittest.mock import MagicMock
        from chat_memory.memory.dialect import detect_dialect
        from chat_memory.core.exceptions import ConfigError
        engine, conn = mock_engine("sqlite://")
        conn.engine.url = MagicMock()
        conn.engine.url.render_as_string.side_effect = RuntimeError("closed")
        with pytest.raises(ConfigError) as exc_info:
            detect_dialect(engine)
        assert exc_info.value.context == {"error_type": "RuntimeError"}
