import logging
import os
import sys
from datetime import datetime

from usb_vlan_agent.constants import IS_DEV


def supports_color():
    """
    Returns True if the running system's terminal supports color, and False otherwise.
    """
    # Check for explicit override
    if os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes"):
        return True
    if os.environ.get("NO_COLOR", "").lower() in ("1", "true", "yes"):
        return False

    is_a_tty = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    # PyCharm and other IDEs often support color even when not a TTY
    ide_support = any(
        env in os.environ for env in ["PYCHARM_HOSTED", "VSCODE_PID", "TERM_PROGRAM"]
    )

    return sys.platform != "win32" and (is_a_tty or ide_support)


USE_COLOR = supports_color()


# https://talyian.github.io/ansicolors/
class CustomFormatter(logging.Formatter):
    """Single-line formatter with ISO-8601 timestamps and optional terminal colors"""

    red = "\x1b[31;20m"
    white = "\x1b[38;5;255m"
    dark_grey = "\x1b[38;5;244m"
    orange = "\x1b[38;5;208m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    fmt = "[%(asctime)s] %(message)s"
    verbose_fmt = "[%(asctime)s] %(levelname)8s | %(name)s: %(message)s (%(filename)s:%(lineno)d)"

    COLORS = {
        logging.DEBUG: dark_grey,
        logging.INFO: white,
        logging.WARNING: orange,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def __init__(self, verbose: bool = False, use_color: bool = USE_COLOR):
        super().__init__(self.verbose_fmt if verbose else self.fmt)
        self.use_color = use_color

    def formatTime(self, record, datefmt=None):
        return (
            datetime.fromtimestamp(record.created)
            .astimezone()
            .isoformat(timespec="seconds")
        )

    def format(self, record):
        # Keep every record on one line, tracebacks included
        line = super().format(record).replace("\n", " | ")
        if not self.use_color:
            return line
        return self.COLORS.get(record.levelno, "") + line + self.reset


def create_console_handler(level=logging.DEBUG, verbose: bool = False):
    """Create a stdout handler with the CustomFormatter. StreamHandler flushes per record."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(CustomFormatter(verbose=verbose))
    return handler


def _env_level(name: str, default: int = logging.INFO) -> int:
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARN,
        "warning": logging.WARN,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return levels.get(os.environ.get(name, "").strip().lower(), default)


def setup_logging(level=logging.INFO, handlers=None):
    """Setup logging with custom formatter"""

    if IS_DEV:
        # Default to DEBUG for dev mode.
        level = logging.DEBUG

    # Allow env override for global app log level
    level = _env_level("USB_VLAN_AGENT_LOG_LEVEL", level)

    if handlers is None:
        handlers = [create_console_handler(level, verbose=IS_DEV)]

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # The scheduler logs every job execution at INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
