import logging
import os
import sys
from datetime import datetime

_PACKAGE_LOGGER = "spekta"

_GREEN = "\033[32m"
_RED = "\033[31m"
_DIM = "\033[2m"
_RESET = "\033[0m"


def setup_logger(log_dir: str = ".spekta/logs", verbose: bool = False) -> logging.Logger:
    """Creates a file logger. All verbose output goes here.

    With *verbose*, records are also echoed to stderr.
    """
    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"spekta_{timestamp}.log")

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)

    # File handler captures everything
    fh = logging.FileHandler(log_file, encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(fh)

    if verbose:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        sh.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(sh)

    return logger


def _use_color(stream) -> bool:
    return hasattr(stream, "isatty") and stream.isatty() and not os.getenv("NO_COLOR")


def print_success(message: str) -> None:
    if _use_color(sys.stdout):
        print(f"{_GREEN}{message}{_RESET}")
    else:
        print(message)


def print_error(message: str) -> None:
    if _use_color(sys.stderr):
        print(f"{_RED}{message}{_RESET}", file=sys.stderr)
    else:
        print(message, file=sys.stderr)


def print_note(message: str) -> None:
    if _use_color(sys.stdout):
        print(f"{_DIM}{message}{_RESET}")
    else:
        print(message)
