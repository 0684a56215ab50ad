"""Tests for yamlenums.logging."""

from __future__ import annotations

import io
import logging

from yamlenums.logging import configure_logging, get_logger


def test_get_logger_nests_components_under_yamlenums() -> None:
    assert get_logger().name == "yamlenums"
    assert get_logger("analyzer.package").name == "yamlenums.analyzer.package"


def test_configure_logging_keeps_a_single_handler() -> None:
    configure_logging()
    logger = configure_logging(stream=io.StringIO())

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_brief_output_hides_debug_traces() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)

    get_logger("analyzer.package").debug("Loaded package")
    get_logger("generator").warning("writing pill_yamlenums.go unformatted")

    assert stream.getvalue() == "yamlenums: WARNING writing pill_yamlenums.go unformatted\n"


def test_verbose_output_names_the_component() -> None:
    stream = io.StringIO()
    logger = configure_logging(verbose=True, stream=stream)

    get_logger("analyzer.package").debug("Loaded package painkiller")

    assert logger.level == logging.DEBUG
    assert stream.getvalue() == "yamlenums: DEBUG [yamlenums.analyzer.package] Loaded package painkiller\n"
