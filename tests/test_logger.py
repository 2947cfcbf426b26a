"""
Unit tests for the pipeline logger.
"""

import io

import pytest

from helproute.logger import Logger, LoggingMode
from helproute.search.nearest import find_nearest


def test_logging_mode_from_value():
    assert LoggingMode.from_value("INFO") is LoggingMode.INFO
    assert LoggingMode.from_value(None) is LoggingMode.NONE
    assert LoggingMode.from_value(LoggingMode.DEBUG) is LoggingMode.DEBUG
    with pytest.raises(ValueError, match="Invalid logging mode"):
        LoggingMode.from_value("verbose")


def test_silent_logger_writes_nothing(line_graph):
    stream = io.StringIO()
    logger = Logger(stream=stream)

    with logger.phase("graph.build"):
        logger.info("ignored")
    logger.graph_stats(line_graph)

    assert stream.getvalue() == ""


def test_info_logger_emits_phase_messages(line_graph):
    stream = io.StringIO()
    logger = Logger(LoggingMode.INFO, stream=stream)

    with logger.phase("graph.build", facilities=2):
        pass
    logger.graph_stats(line_graph)
    logger.debug("hidden")

    lines = stream.getvalue().splitlines()
    assert lines == [
        "[INFO]\tgraph.build.start\tfacilities=2",
        "[INFO]\tgraph.build.complete\tfacilities=2",
        "[INFO]\tgraph.stats\tnodes=3\tedges=4",
    ]


def test_phase_failure_is_logged_and_reraised():
    stream = io.StringIO()
    logger = Logger(LoggingMode.INFO, stream=stream)

    with pytest.raises(RuntimeError), logger.phase("search.run"):
        raise RuntimeError("boom")

    assert "[INFO]\tsearch.run.failed\terror=boom" in stream.getvalue()


def test_debug_logger_reports_elapsed_and_degrees(line_graph):
    stream = io.StringIO()
    logger = Logger(LoggingMode.DEBUG, stream=stream)

    with logger.phase("stitch.path"):
        pass
    logger.graph_stats(line_graph)

    output = stream.getvalue()
    assert "[DEBUG]\tstitch.path.elapsed\tseconds=" in output
    assert "[DEBUG]\tgraph.node\tnode=B\tdegree=2" in output


def test_nearest_message(triangle_graph):
    stream = io.StringIO()
    logger = Logger(LoggingMode.INFO, stream=stream)

    logger.nearest(find_nearest(triangle_graph, "S", ["F1", "F2"]))

    assert stream.getvalue() == (
        "[INFO]\tnearest.selected\tfacility=F2\tdistance=3.0\thops=1\n"
    )
