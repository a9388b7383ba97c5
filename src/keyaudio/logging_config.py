import logging
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path

_PACKAGE_LOGGER = logging.getLogger("keyaudio")


def configure_logging(log_dir: Path | None = None, console_level: int = logging.WARNING) -> None:
    """Send keyaudio's records to stderr at `console_level`, and everything to `log_dir`/keyaudio.log if given.

    Only the `keyaudio` logger is touched, so this can be called by applications that configure logging themselves.
    """
    _PACKAGE_LOGGER.setLevel(logging.DEBUG)
    _PACKAGE_LOGGER.propagate = False
    for handler in list(_PACKAGE_LOGGER.handlers):
        _PACKAGE_LOGGER.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    _PACKAGE_LOGGER.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "keyaudio.log", maxBytes=1_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s [%(threadName)s] %(message)s")
        )
        _PACKAGE_LOGGER.addHandler(file_handler)

    # loop and sequence continuations run on timer threads, whose exceptions would otherwise only reach stderr
    threading.excepthook = _log_thread_exception


def _log_thread_exception(args: threading.ExceptHookArgs) -> None:
    _PACKAGE_LOGGER.error(
        "Uncaught exception in thread '%s':",
        args.thread.name if args.thread else "unknown",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),  # type: ignore[arg-type]
    )
