import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_console_handler: logging.Handler | None = None


def configure_logging(level: str | int = "INFO") -> None:
    """Attach one console handler to the root logger; repeated calls only adjust the level."""
    global _console_handler
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)
    if _console_handler is None:
        _console_handler = logging.StreamHandler()
        _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_console_handler)
