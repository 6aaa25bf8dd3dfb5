from __future__ import annotations

import json

from infrastructure.logging.console_logger import ConsoleLogger


def test_console_logger_emits_type_field(capsys) -> None:
    logger = ConsoleLogger()

    logger.info("request.dispatch", method="GET")

    captured = capsys.readouterr()
    line = captured.out.strip()

    assert line.startswith("request.dispatch ")
    payload = json.loads(line.replace("request.dispatch ", "", 1))
    assert payload["type"] == "request.dispatch"
    assert payload["method"] == "GET"


def test_console_logger_bind_merges_fields(capsys) -> None:
    logger = ConsoleLogger().bind(component="transport").bind(attempt=1)

    logger.warning("http.option_ignored", option="sink")

    payload = json.loads(capsys.readouterr().out.strip().split(" ", 1)[1])
    assert payload == {"component": "transport", "attempt": 1, "option": "sink", "type": "http.option_ignored"}


def test_console_logger_drops_events_below_min_level(capsys) -> None:
    logger = ConsoleLogger(min_level="warning")

    logger.debug("request.dispatch")
    logger.info("request.completed")
    logger.error("request.failed", error="boom")

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("request.failed ")


def test_console_logger_serializes_bytes(capsys) -> None:
    ConsoleLogger().debug("payload", raw=b"\x00")

    line = capsys.readouterr().out.strip()
    assert json.loads(line.split(" ", 1)[1])["raw"] == "b'\\x00'"
