# logger.py
"""
Logging setup for the fuzzy inference engine.

Every pipeline stage logs through its own named logger. setup_logging()
gives each of them a file in `log_dir` and attaches a console handler to the
"engine" logger.

Records are stamped with an evaluation index. FuzzyEngine sets it at the
start of every evaluate call (0, 1, 2, ... per engine), so the records of
one evaluation can be grepped together across the stage files. Callers may
set it with set_evaluation_index() for records they emit outside evaluate;
the next evaluate call overwrites it. The index is -1 until
something sets it.
"""

import glob
import logging
import os
from contextvars import ContextVar

LOGGER_NAMES = (
    "engine",
    "fuzzifier",
    "rule_engine",
    "defuzzifier",
    "operators",
    "config",
)

LOG_FORMAT = "%(i)06d | %(levelname)s | %(name)s | %(message)s"

_evaluation_index = ContextVar("evaluation_index", default=-1)


def set_evaluation_index(i: int) -> None:
    _evaluation_index.set(int(i))


def get_evaluation_index() -> int:
    return _evaluation_index.get()


class EvaluationIndexFilter(logging.Filter):
    """Adds the current evaluation index to every record as `record.i`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.i = _evaluation_index.get()
        return True


def _remove_rotated(log_dir: str) -> None:
    for path in glob.glob(os.path.join(log_dir, "*.log.*")):
        try:
            os.remove(path)
        except OSError:
            logging.getLogger("engine").debug("Could not remove rotated log '%s'.", path)


def _stamped(handler: logging.Handler, fmt: logging.Formatter, level: int) -> logging.Handler:
    handler.setFormatter(fmt)
    handler.setLevel(level)
    handler.addFilter(EvaluationIndexFilter())
    return handler


def _detach_handlers(log: logging.Logger) -> None:
    for h in list(log.handlers):
        log.removeHandler(h)
        h.close()


def setup_logging(
    log_dir: str = "logs",
    overwrite: bool = True,
    log_level: int = logging.DEBUG,
    console_level: int = logging.INFO,
    cleanup_rotated: bool = True,
) -> None:
    """
    Routes each stage logger to its own file and the engine logger to the console.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_dir (str): Directory for the `<logger>.log` files; created if missing.
        overwrite (bool): Truncate existing log files instead of appending.
        log_level (int): Level of the loggers and their file handlers.
        console_level (int): Level of the console handler on "engine".
        cleanup_rotated (bool): Delete leftover `*.log.*` files in `log_dir`.
    """
    os.makedirs(log_dir, exist_ok=True)
    if cleanup_rotated:
        _remove_rotated(log_dir)

    fmt = logging.Formatter(LOG_FORMAT)
    mode = "w" if overwrite else "a"

    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        log.setLevel(log_level)
        log.propagate = False
        _detach_handlers(log)
        path = os.path.join(log_dir, f"{name}.log")
        log.addHandler(_stamped(logging.FileHandler(path, mode=mode, encoding="utf-8"), fmt, log_level))

    engine_log = logging.getLogger("engine")
    engine_log.addHandler(_stamped(logging.StreamHandler(), fmt, console_level))
    engine_log.info("Logging system initialized in '%s'.", log_dir)
