import logging
import sys
import structlog
from structlog.types import Processor

HANDLER_NAME = "promptcraft"


def _add_service_fields(**fields) -> Processor:
    def processor(logger, method_name, event_dict):
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict
    return processor


def configure_logging(log_level: str = "INFO", is_debug: bool = False, storage_backend: str = None):
    """
    Configure structlog and route stdlib logging through the same renderer.

    Service events (`structlog.get_logger()`) and stdlib records (werkzeug,
    sqlalchemy, `current_app.logger`) end up on one stdout handler, so a
    request's access line and its traceback render like the `prompt.*` events:
    colored console lines in debug, one JSON object per line otherwise. Every
    event is tagged with the active storage backend.

    Safe to call once per app: the handler installed by a previous call is
    replaced rather than stacked.
    """
    level = log_level.upper()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service_fields(storage_backend=storage_backend),
        structlog.processors.dict_tracebacks,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_debug:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)

    handler = logging.StreamHandler(sys.stdout)
    handler.name = HANDLER_NAME
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.name == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    log_mode = "development (console)" if is_debug else "production (JSON)"
    logging.getLogger(__name__).info(
        "Logging configured in %s mode with level: %s", log_mode, level
    )
