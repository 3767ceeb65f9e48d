import io
import json
import logging

import pytest

from icao9303.config import ConfigurationError, configure
from icao9303.logging_config import (
    PACKAGE_LOGGER,
    ComponentFilter,
    JSONFormatter,
    TraceContextFilter,
    setup_logging,
)


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = logger.handlers[:]
    level = logger.level
    yield logger
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def _record(name="icao9303.mrz.composers", message="MRZ composed"):
    return logging.LogRecord(
        name=name,
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestFilters:
    @pytest.mark.parametrize(
        ("name", "component"),
        [("icao9303.mrz.composers", "mrz"), ("icao9303.vds.seal", "vds"), ("icao9303", "icao9303"), ("app", "app")],
    )
    def test_component(self, name, component):
        record = _record(name)

        ComponentFilter().filter(record)

        assert record.component == component

    def test_no_trace_outside_a_span(self):
        record = _record()

        TraceContextFilter().filter(record)

        assert record.trace_id is None
        assert record.span_id is None


def test_json_formatter():
    record = _record()
    ComponentFilter().filter(record)
    TraceContextFilter().filter(record)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "WARNING"
    assert entry["component"] == "mrz"
    assert entry["logger"] == "icao9303.mrz.composers"
    assert entry["message"] == "MRZ composed"
    assert "trace_id" not in entry


class TestSetupLogging:
    def test_json_output(self, package_logger):
        stream = io.StringIO()

        setup_logging(log_level="debug", log_format="json", stream=stream)
        logging.getLogger("icao9303.vds.seal").info("Seal decoded")

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert lines[-1]["component"] == "vds"
        assert lines[-1]["message"] == "Seal decoded"

    def test_text_output(self, package_logger):
        stream = io.StringIO()

        setup_logging(stream=stream)
        logging.getLogger("icao9303.utils.mrz_string").warning("Name is too long")

        assert "WARNING [utils] icao9303.utils.mrz_string: Name is too long" in stream.getvalue()

    def test_calling_again_replaces_the_handler(self, package_logger):
        setup_logging()
        setup_logging(log_format="%(message)s")

        assert len(package_logger.handlers) == 1

    def test_off(self, package_logger):
        setup_logging(log_level="OFF")

        assert package_logger.level > logging.CRITICAL
        assert package_logger.handlers == []

    def test_unknown_level(self, package_logger):
        with pytest.raises(ValueError):
            setup_logging(log_level="LOUD")

    def test_root_logger_is_untouched(self, package_logger):
        root = logging.getLogger()
        handlers = root.handlers[:]

        setup_logging(log_format="json")

        assert root.handlers == handlers


class TestConfigureAppliesLogging:
    def test_log_settings_configure_package_logger(self, package_logger):
        configure(log_level="WARNING", log_format="json")

        assert package_logger.level == logging.WARNING
        assert isinstance(package_logger.handlers[0].formatter, JSONFormatter)

    def test_other_settings_leave_logging_alone(self, package_logger):
        configure(log_level="ERROR")
        handler = package_logger.handlers[0]

        configure(year_cutoff=50)

        assert package_logger.handlers == [handler]
        assert package_logger.level == logging.ERROR

    def test_invalid_level(self, package_logger):
        with pytest.raises(ConfigurationError):
            configure(log_level="LOUD")
