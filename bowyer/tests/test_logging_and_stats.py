"""Logging hierarchy and statistics formatting."""
import logging

from bowyer import configure_logging, get_logger, triangulate, TriangulationConfig, TriangulationStats, format_stats


def test_get_logger_is_namespaced():
    assert get_logger('triangulation').name == 'bowyer.triangulation'
    assert get_logger('bowyer.config').name == 'bowyer.config'
    assert get_logger('bowyer.x', level='DEBUG').level == logging.DEBUG


def test_configure_logging_installs_single_stream_handler():
    configure_logging('DEBUG')
    configure_logging('INFO')
    root = logging.getLogger('bowyer')
    streams = [h for h in root.handlers if not isinstance(h, logging.NullHandler)]
    assert len(streams) == 1
    assert root.level == logging.INFO
    assert root.propagate is False


def test_engine_debug_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger='bowyer'):
        triangulate([(0, 0), (1, 0), (1, 1), (0, 1), (0.5, 0.4)],
                    config=TriangulationConfig(log_progress_every=2))
    assert 'super-triangle' in caplog.text
    assert 'inserted 2/5 points' in caplog.text
    assert 'triangulated 5 points' in caplog.text


def test_collect_stats_without_caller_object():
    # collect_stats only needs to not fail when no stats object is passed
    tris = triangulate([(0, 0), (1, 0), (1, 1), (0, 1)], config=TriangulationConfig(collect_stats=True))
    assert len(tris) == 2


def test_format_stats():
    stats = TriangulationStats()
    triangulate([(0, 0), (1, 0), (1, 1), (0, 1)], stats=stats)
    text = format_stats(stats)
    assert 'n_triangles' in text and 'layout' in text
    assert format_stats(None) == "<no stats>"
