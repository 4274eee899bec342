import logging

import pytest

from fuzzy_engine import setup_logging
from fuzzy_engine.logger import LOGGER_NAMES, get_evaluation_index, set_evaluation_index


@pytest.fixture
def restore_loggers():
    """setup_logging() rewires the named loggers; put them back for later tests."""
    saved = {}
    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        saved[name] = (list(log.handlers), log.propagate, log.level)
    yield
    for name, (handlers, propagate, level) in saved.items():
        log = logging.getLogger(name)
        for h in list(log.handlers):
            log.removeHandler(h)
            h.close()
        for h in handlers:
            log.addHandler(h)
        log.propagate = propagate
        log.setLevel(level)
    set_evaluation_index(-1)


def test_one_file_per_logger(tmp_path, restore_loggers):
    setup_logging(log_dir=str(tmp_path))
    for name in LOGGER_NAMES:
        assert (tmp_path / f"{name}.log").exists()


def test_caller_set_index_is_stamped(tmp_path, restore_loggers):
    setup_logging(log_dir=str(tmp_path))
    set_evaluation_index(7)
    logging.getLogger("engine").info("checkpoint")
    for h in logging.getLogger("engine").handlers:
        h.flush()

    engine_log = (tmp_path / "engine.log").read_text(encoding="utf-8")
    assert "000007 | INFO | engine | checkpoint" in engine_log


def test_each_evaluation_is_numbered(tmp_path, restore_loggers, fan_engine):
    setup_logging(log_dir=str(tmp_path))
    set_evaluation_index(7)
    fan_engine.evaluate({"temperature": 50})
    fan_engine.evaluate({"temperature": 90})
    assert get_evaluation_index() == 1
    for h in logging.getLogger("rule_engine").handlers:
        h.flush()

    rule_log = (tmp_path / "rule_engine.log").read_text(encoding="utf-8")
    assert "000000 | DEBUG | rule_engine | Rule# 1 W= 1.000" in rule_log
    assert "000001 | DEBUG | rule_engine | Rule# 2 W= 1.000" in rule_log
    assert "000007 |" not in rule_log

def test_rotated_logs_are_removed(tmp_path, restore_loggers):
    rotated = tmp_path / "engine.log.1"
    rotated.write_text("old", encoding="utf-8")
    setup_logging(log_dir=str(tmp_path))
    assert not rotated.exists()


def test_rotated_logs_can_be_kept(tmp_path, restore_loggers):
    rotated = tmp_path / "engine.log.1"
    rotated.write_text("old", encoding="utf-8")
    setup_logging(log_dir=str(tmp_path), cleanup_rotated=False)
    assert rotated.exists()


def test_append_mode_keeps_previous_content(tmp_path, restore_loggers):
    (tmp_path / "config.log").write_text("previous run\n", encoding="utf-8")
    setup_logging(log_dir=str(tmp_path), overwrite=False)
    assert (tmp_path / "config.log").read_text(encoding="utf-8").startswith("previous run")


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_loggers):
    setup_logging(log_dir=str(tmp_path))
    setup_logging(log_dir=str(tmp_path))
    # one file handler plus the console handler
    assert len(logging.getLogger("engine").handlers) == 2
    assert len(logging.getLogger("fuzzifier").handlers) == 1
    assert logging.getLogger("fuzzifier").propagate is False
