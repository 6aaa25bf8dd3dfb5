from __future__ import annotations

from infrastructure.logging.composite_logger import CompositeLogger


class ListLogger:
    def __init__(self, sink, bound=None):
        self.sink = sink
        self.bound = bound or {}

    def _emit(self, level, event, fields):
        self.sink.append((level, event, {**self.bound, **fields}))

    def debug(self, event, **fields):
        self._emit("debug", event, fields)

    def info(self, event, **fields):
        self._emit("info", event, fields)

    def warning(self, event, **fields):
        self._emit("warning", event, fields)

    def error(self, event, **fields):
        self._emit("error", event, fields)

    def bind(self, **fields):
        return ListLogger(self.sink, {**self.bound, **fields})


def test_composite_logger_fans_out_in_order() -> None:
    first, second = [], []
    logger = CompositeLogger([ListLogger(first), ListLogger(second)])

    logger.warning("http.option_ignored", option="sink")
    logger.error("request.failed", error="boom")

    expected = [
        ("warning", "http.option_ignored", {"option": "sink"}),
        ("error", "request.failed", {"error": "boom"}),
    ]
    assert first == expected
    assert second == expected


def test_composite_logger_bind_applies_to_all() -> None:
    first, second = [], []
    logger = CompositeLogger([ListLogger(first), ListLogger(second)]).bind(component="builder")

    logger.debug("request.dispatch")

    assert first == second == [("debug", "request.dispatch", {"component": "builder"})]
