import json
import logging
from collections.abc import Generator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from _pytest.logging import LogCaptureFixture

from src import logging_config
from src.logging_config import HANDLER_MARKER, LOG_NAME, JsonFormatter, get_logger
from src.records import Product


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, HANDLER_MARKER, False)]


@pytest.fixture(autouse=True)
def reset_logger_handlers(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Ensure tests run with a clean logger state and keep log files in tmp."""
    monkeypatch.setattr(logging_config, "LOG_FILE", tmp_path / "logs" / "app.log")
    logger = logging.getLogger(LOG_NAME)
    for handler in _own_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
    yield
    for handler in _own_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True

def test_json_formatter_returns_json_with_extras() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )
    record.request_id = "abc"
    record.table = "product"
    formatted = formatter.format(record)
    data = json.loads(formatted)
    assert data["level"] == "INFO"
    assert data["logger"] == "test"
    assert data["message"] == "hello"
    assert data["request_id"] == "abc"
    assert data["extra"]["table"] == "product"


def test_json_formatter_omits_empty_extra() -> None:
    record = logging.LogRecord("test", logging.DEBUG, __file__, 1, "plain", (), None)
    data = json.loads(JsonFormatter().format(record))
    assert "extra" not in data
    assert "request_id" not in data


def test_get_logger_configures_two_handlers(tmp_path: Path) -> None:
    logger = get_logger()
    own = _own_handlers(logger)
    assert len(own) == 2
    assert any(type(h) is logging.StreamHandler for h in own)
    assert any(isinstance(h, RotatingFileHandler) for h in own)
    assert (tmp_path / "logs").is_dir()
    assert get_logger() is logger
    assert len(_own_handlers(logger)) == 2


def test_get_logger_ignores_handlers_it_did_not_add() -> None:
    logger = logging.getLogger(LOG_NAME)
    foreign = logging.NullHandler()
    logger.addHandler(foreign)
    try:
        get_logger()
        assert len(_own_handlers(logger)) == 2
        assert foreign in logger.handlers
    finally:
        logger.removeHandler(foreign)


def test_library_modules_do_not_configure_handlers(db_path: Path) -> None:
    Product(name="Widget").insert().delete()
    assert _own_handlers(logging.getLogger(LOG_NAME)) == []
    for name in (f"{LOG_NAME}.records", f"{LOG_NAME}.db"):
        child = logging.getLogger(name)
        assert _own_handlers(child) == []
        assert child.propagate
    assert not logging_config.LOG_FILE.exists()


def test_record_operations_log_structured_extras(
    db_path: Path, caplog: LogCaptureFixture
) -> None:
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOG_NAME)
    try:
        product = Product(name="Widget").insert()
    finally:
        logger.removeHandler(caplog.handler)

    inserted = [r for r in caplog.records if r.getMessage() == "Record inserted"]
    assert len(inserted) == 1
    record = inserted[0]
    assert record.levelno == logging.DEBUG
    data = json.loads(JsonFormatter().format(record))
    assert data["extra"] == {"operation": "insert", "table": "product", "record_id": product.id}
