import logging
import sys
from typing import Optional


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Attach stdout/stderr handlers to one logger and return it.

    ``logger_name`` selects the logger to configure; the package passes
    ``"json_schema_validator"`` so only its own module loggers (which propagate
    to it) are affected and the root logger of a host application is left
    alone. Handlers previously installed on that logger are replaced, so
    calling this again (e.g. after ``--log-level``) does not duplicate output.

    Records below ``stderr_level`` go to stdout, the rest to stderr.
    """

    target = logging.getLogger(logger_name)
    target.handlers.clear()
    target.setLevel(level)

    if formatter is None:
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

    if stderr_level < logging.DEBUG:
        stderr_level = logging.DEBUG

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)
    stderr_handler.setFormatter(formatter)

    target.addHandler(stdout_handler)
    target.addHandler(stderr_handler)
    return target
