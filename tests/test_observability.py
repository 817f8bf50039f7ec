import json
import logging

from pythonjsonlogger import jsonlogger

from journey_planner.config import ObservabilityConfig
from journey_planner.observability import ROOT_LOGGER, configure_logging


def _own_handlers(logger):
    return [h for h in logger.handlers if getattr(h, "_journey_planner", False)]


def test_plain_text_logging():
    logger = configure_logging(ObservabilityConfig(level="debug"))

    (handler,) = _own_handlers(logger)
    assert logger.name == ROOT_LOGGER
    assert logger.level == logging.DEBUG
    assert not isinstance(handler.formatter, jsonlogger.JsonFormatter)


def test_reconfigure_replaces_handler():
    configure_logging(ObservabilityConfig())
    logger = configure_logging(ObservabilityConfig(level="WARNING"))

    assert len(_own_handlers(logger)) == 1
    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    logger = configure_logging(ObservabilityConfig(level="chatty"))
    assert logger.level == logging.INFO


def test_structured_logging_keeps_extra_fields():
    logger = configure_logging(
        ObservabilityConfig(structured=True, format="%(levelname)s %(message)s")
    )
    (handler,) = _own_handlers(logger)

    record = logging.getLogger("journey_planner.test").makeRecord(
        "journey_planner.test",
        logging.INFO,
        __file__,
        1,
        "Feed refreshed",
        None,
        None,
        extra={"feed": "tripwire", "record_count": 3},
    )
    payload = json.loads(handler.formatter.format(record))

    assert payload["message"] == "Feed refreshed"
    assert payload["feed"] == "tripwire"
    assert payload["record_count"] == 3
