"""Tests for structured logging configuration."""

import json
import logging
import subprocess
import sys
from unittest.mock import patch

import pytest

from icagent.observability.logging import (
    REDACTED_PLACEHOLDER,
    configure_logging,
    get_logger,
    sanitize_for_logging,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_respects_log_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_format="console", log_level="WARNING", force=True)

        logger = get_logger("test")
        logger.info("test.hidden")
        logger.warning("test.shown")

        out = capsys.readouterr().out
        assert "test.shown" in out
        assert "test.hidden" not in out

    def test_configure_logging_with_json_format(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_format="json", log_level="INFO", service_name="svc", force=True)

        get_logger("test.json").info("test.event", key_count=2)

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert event["event"] == "test.event"
        assert event["key_count"] == 2
        assert event["logger"] == "test.json"
        assert event["service"] == "svc"
        assert event["level"] == "info"

    def test_configure_logging_does_not_reconfigure_by_default(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_format="console", log_level="DEBUG", force=True)
        configure_logging(log_format="json", log_level="ERROR")

        get_logger("test").debug("test.still_debug")
        assert "test.still_debug" in capsys.readouterr().out

    def test_configure_logging_from_environment_variables(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch.dict(
            "os.environ",
            {
                "ICAGENT_LOG_FORMAT": "json",
                "ICAGENT_LOG_LEVEL": "ERROR",
                "ICAGENT_SERVICE_NAME": "env-service",
            },
        ):
            configure_logging(force=True)

        logger = get_logger("test.env")
        logger.warning("test.hidden")
        logger.error("test.shown")

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["service"] == "env-service"

    def test_configure_logging_leaves_stdlib_root_alone(self) -> None:
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level

        configure_logging(log_format="json", log_level="DEBUG", force=True)

        assert root.handlers == handlers
        assert root.level == level


def test_import_leaves_host_logging_alone() -> None:
    script = (
        "import logging\n"
        "root = logging.getLogger()\n"
        "mine = logging.NullHandler()\n"
        "root.addHandler(mine)\n"
        "root.setLevel(logging.ERROR)\n"
        "import icagent\n"
        "import icagent.cbor.codec, icagent.identity.ed25519\n"
        "icagent.Ed25519KeyIdentity.generate()\n"
        "assert root.handlers == [mine], root.handlers\n"
        "assert root.level == logging.ERROR, root.level\n"
    )
    result = subprocess.run([sys.executable, "-c", script], capture_output=True, text=True)
    assert result.returncode == 0, result.stderr


class TestSanitizeForLogging:
    """Key material is redacted before a rejected identity is logged."""

    def test_key_fields_redacted(self) -> None:
        data = {"publicKey": [1, 2], "_privateKey": {"data": [3]}, "secretKey": "x"}
        result = sanitize_for_logging(data)
        assert result == {
            "publicKey": REDACTED_PLACEHOLDER,
            "_privateKey": REDACTED_PLACEHOLDER,
            "secretKey": REDACTED_PLACEHOLDER,
        }

    def test_nested_objects_sanitized(self) -> None:
        data = {"kind": "legacy", "nested": {"seed": "00", "id": 1}}
        result = sanitize_for_logging(data)
        assert result["kind"] == "legacy"
        assert result["nested"]["seed"] == REDACTED_PLACEHOLDER
        assert result["nested"]["id"] == 1

    def test_list_of_dicts_sanitized(self) -> None:
        data = {"items": [{"name": "a", "secret": "p1"}]}
        result = sanitize_for_logging(data)
        assert result["items"][0] == {"name": "a", "secret": REDACTED_PLACEHOLDER}

    def test_empty_dict_returns_empty(self) -> None:
        assert sanitize_for_logging({}) == {}
