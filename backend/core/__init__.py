from .logging import LOG_DATE_FORMAT, LOG_FORMAT, configure_console_log

__all__ = [
    "LOG_FORMAT",
    "LOG_DATE_FORMAT",
    "configure_console_log",
]
