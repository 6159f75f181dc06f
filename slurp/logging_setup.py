# slurp/logging_setup.py
import logging
import sys
from pathlib import PurePath
from typing import IO, Optional
import structlog

LOGGER_NAME = "slurp"

# -v count on the command line -> level name.
VERBOSITY_LEVELS = ("warning", "info", "debug")

def level_for_verbosity(verbosity: int) -> str:
    return VERBOSITY_LEVELS[max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))]

def _stringify_paths(logger, method_name, event_dict):
    # loader events carry Path objects (directories, files, roots); render them
    # as plain strings so console and JSON output agree.
    for key, value in event_dict.items():
        if isinstance(value, PurePath):
            event_dict[key] = str(value)
        elif isinstance(value, (list, tuple)) and any(isinstance(v, PurePath) for v in value):
            event_dict[key] = [str(v) if isinstance(v, PurePath) else v for v in value]
    return event_dict

def configure_logging(log_level_str: str = "warning", force_json_logs: bool = False, stream: Optional[IO[str]] = None):
    """Route structlog output for the `slurp` logger tree to stderr (or `stream`).

    Only the CLI calls this; library users keep whatever logging setup their
    host application has. Calling it again replaces the previous handler.
    """
    log_level = logging.getLevelName(log_level_str.upper())
    if not isinstance(log_level, int):
        log_level = logging.WARNING
    stream = stream if stream is not None else sys.stderr

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _stringify_paths,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if force_json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[structlog.stdlib.add_log_level],
    ))

    slurp_logger = logging.getLogger(LOGGER_NAME)
    slurp_logger.handlers.clear()
    slurp_logger.addHandler(handler)
    slurp_logger.setLevel(log_level)
    # the summary and errors already go to stderr; don't echo records through root.
    slurp_logger.propagate = False

    structlog.get_logger(__name__).info(
        "logging_configured", level=logging.getLevelName(log_level).lower(), json=force_json_logs,
    )
