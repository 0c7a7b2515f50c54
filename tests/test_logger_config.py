"""Tests for BotLogger JSON output and botconfig environment parsing."""

import importlib
import io
import json
import logging
from unittest.mock import MagicMock

import pytest
import requests

from conftest import make_response

import botconfig
from botapi import client as client_module
from botapi.exceptions import InvalidConfigurationError, RequestException
from botcore.logger import BotLogger, _JsonFormatter


# ── Logger ───────────────────────────────────────────────────────────────────


class TestJsonFormatter:
    """Validate the JSON formatter."""

    def test_extra_fields_merged(self) -> None:
        record = logging.LogRecord(
            name="botapi.client", level=logging.WARNING, pathname=__file__, lineno=1,
            msg="API request rejected", args=(), exc_info=None,
        )
        record.api_endpoint = "sendMessage"
        record.status_code = 400

        entry = json.loads(_JsonFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "botapi.client"
        assert entry["message"] == "API request rejected"
        assert entry["api_endpoint"] == "sendMessage"
        assert entry["status_code"] == 400


class TestBotLogger:
    """Validate the singleton logger."""

    @pytest.fixture(autouse=True)
    def _reset(self):
        BotLogger.reset()
        yield
        BotLogger.reset()

    def test_singleton(self) -> None:
        assert BotLogger.get_logger() is BotLogger.get_logger()
        assert BotLogger.get_logger().name == "botapi"

    def test_console_only_by_default(self) -> None:
        logger = BotLogger.get_logger()
        assert len(logger.handlers) == 1

    def test_file_handler_when_dir_given(self, tmp_path) -> None:
        logger = BotLogger.get_logger(log_dir=str(tmp_path / "logs"))
        logger.info("hello", extra={"api_endpoint": "getMe"})
        for handler in logger.handlers:
            handler.flush()

        lines = (tmp_path / "logs" / "botapi.log").read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["api_endpoint"] == "getMe"

    def test_client_logger_is_child(self) -> None:
        assert logging.getLogger("botapi.client").parent is BotLogger.get_logger()

    def test_reset_closes_handlers(self, tmp_path) -> None:
        logger = BotLogger.get_logger(log_dir=str(tmp_path / "logs"))
        handlers = list(logger.handlers)
        for handler in handlers:
            handler.close = MagicMock(side_effect=handler.close)

        BotLogger.reset()

        assert logger.handlers == []
        for handler in handlers:
            handler.close.assert_called_once()
        assert len(BotLogger.get_logger().handlers) == 1


class TestClientLogFields:
    """Every client log record carries the same diagnostic fields."""

    @staticmethod
    def _assert_fields(records) -> None:
        assert records
        for record in records:
            assert "api_endpoint" in record.__dict__
            assert "status_code" in record.__dict__
            assert "error_code" in record.__dict__

    @pytest.mark.asyncio
    async def test_success_and_rejection(self, client, session, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="botapi.client")
        session.request.return_value = make_response(
            200, {"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}}
        )
        await client.get_me()
        session.request.return_value = make_response(
            401, {"ok": False, "error_code": 401, "description": "Unauthorized"}
        )
        assert await client.test_api() is False

        records = [r for r in caplog.records if r.name == "botapi.client"]
        self._assert_fields(records)
        rejected = [r for r in records if r.getMessage() == "API request rejected"]
        assert rejected[0].status_code == 401
        assert rejected[0].error_code == 401

    @pytest.mark.asyncio
    async def test_transport_and_download(self, client, session, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="botapi.client")
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(RequestException):
            await client.get_me()
        session.request.side_effect = None
        session.request.return_value = make_response(404, "missing")
        with pytest.raises(RequestException):
            await client.download_file("docs/a.txt", io.BytesIO())

        records = [r for r in caplog.records if r.name == "botapi.client"]
        self._assert_fields(records)
        transport = [r for r in records if r.getMessage() == "Request transport error"]
        assert transport[0].status_code is None
        assert transport[0].error_code is None


# ── botconfig ────────────────────────────────────────────────────────────────


class TestConfig:
    """Validate environment parsing."""

    @pytest.fixture()
    def reload_config(self, monkeypatch):
        def _reload(**env):
            for key in ("BOT_TOKEN", "BOT_API_SERVER_URL", "BOT_REQUEST_TIMEOUT", "BOT_DOWNLOAD_CHUNK_SIZE"):
                monkeypatch.delenv(key, raising=False)
            for key, value in env.items():
                monkeypatch.setenv(key, value)
            monkeypatch.setattr("dotenv.load_dotenv", lambda *a, **k: False)
            return importlib.reload(botconfig)

        yield _reload
        monkeypatch.undo()
        importlib.reload(botconfig)

    def test_defaults(self, reload_config) -> None:
        cfg = reload_config()
        assert cfg.BOT_TOKEN is None
        assert cfg.BOT_API_SERVER_URL == "https://api.telegram.org"
        assert cfg.REQUEST_TIMEOUT == cfg.DEFAULT_REQUEST_TIMEOUT
        assert cfg.DOWNLOAD_CHUNK_SIZE == cfg.DEFAULT_DOWNLOAD_CHUNK_SIZE

    def test_overrides(self, reload_config) -> None:
        cfg = reload_config(
            BOT_TOKEN="42:abc",
            BOT_API_SERVER_URL="http://localhost:8081/",
            BOT_REQUEST_TIMEOUT="2.5",
            BOT_DOWNLOAD_CHUNK_SIZE="1024",
        )
        assert cfg.BOT_TOKEN == "42:abc"
        assert cfg.BOT_API_SERVER_URL == "http://localhost:8081"
        assert cfg.REQUEST_TIMEOUT == 2.5
        assert cfg.DOWNLOAD_CHUNK_SIZE == 1024

    @pytest.mark.parametrize("raw", ["abc", "-1", "0"])
    def test_invalid_timeout_falls_back(self, reload_config, raw: str) -> None:
        cfg = reload_config(BOT_REQUEST_TIMEOUT=raw)
        assert cfg.REQUEST_TIMEOUT == cfg.DEFAULT_REQUEST_TIMEOUT

    def test_log_level_parsing(self) -> None:
        assert botconfig._parse_log_level("debug") == logging.DEBUG
        assert botconfig._parse_log_level("nonsense") == logging.INFO
        assert botconfig._parse_log_level(None) == logging.INFO


class TestDefaultClient:
    """Validate the lazily-built module-level client."""

    def test_built_from_config(self, monkeypatch) -> None:
        monkeypatch.setattr(client_module, "_default_client", None)
        monkeypatch.setattr(botconfig, "BOT_TOKEN", "42:abc")
        monkeypatch.setattr(botconfig, "REQUEST_TIMEOUT", 7.0)

        default = client_module.get_default_client()

        assert default.bot_id == 42
        assert default.timeout == 7.0
        assert client_module.get_default_client() is default
        default.close()

    def test_missing_token(self, monkeypatch) -> None:
        monkeypatch.setattr(client_module, "_default_client", None)
        monkeypatch.setattr(botconfig, "BOT_TOKEN", None)

        with pytest.raises(InvalidConfigurationError):
            client_module.get_default_client()

    def test_injected_session_untouched(self) -> None:
        session = MagicMock()
        c = client_module.BotClient("42:abc", session=session)
        c.close()
        session.close.assert_not_called()
