# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                      ANNOUNCEMENT BOT LOGGING SETUP                        ║
# ║   Queue-backed logging with colored console output and a daily rotated     ║
# ║   log file. Falls back to local or temp directories when needed.          ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import atexit
import logging
import os
import platform
import sys
import tempfile
from logging.handlers import MemoryHandler, QueueHandler, QueueListener, TimedRotatingFileHandler
from queue import Queue
from typing import List, Optional

# Third-party imports
from colorlog import ColoredFormatter

# Local application imports
from utils.environ import DEBUG, get_str_env

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOGGING CONFIGURATION AND CONSTANTS                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Preferred log directory (mounted volume in the container image)
LOG_DIR = get_str_env("LOG_DIR", "/data/logs")
LOG_FILE_NAME = "calendarbot.log"

FALLBACK_DIRS = [
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs"),
    tempfile.gettempdir(),
]

LEVEL = logging.DEBUG if DEBUG else logging.INFO

FILE_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s [%(filename)s:%(lineno)d]: %(message)s"
CONSOLE_FORMAT = "%(log_color)s[%(asctime)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Path of the file actually written to, None when file logging is off
active_log_file: Optional[str] = None

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOG DIRECTORY SETUP                                                        ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- find_log_file ---
# Picks the first writable directory among LOG_DIR and FALLBACK_DIRS.
# Prints instead of logging because the logger is not configured yet.
# Returns: Full path of the log file to use, or None if nothing is writable.
def find_log_file() -> Optional[str]:
    for directory in [LOG_DIR, *FALLBACK_DIRS]:
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            print(f"Notice: Could not use log directory {directory}: {e}")
            continue
        if os.access(directory, os.W_OK):
            return os.path.join(directory, LOG_FILE_NAME)
    print("WARNING: No writable log directory found. File logging disabled.")
    return None

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ HANDLER CONSTRUCTION                                                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if log_file:
        try:
            file_handler = TimedRotatingFileHandler(
                log_file, when="midnight", interval=1, backupCount=7, encoding="utf-8"
            )
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            file_handler.setLevel(LEVEL)
            # Buffer records and flush on ERROR or when 1000 are queued
            memory_handler = MemoryHandler(capacity=1000, flushLevel=logging.ERROR, target=file_handler)
            memory_handler.setLevel(logging.DEBUG)
            handlers.append(memory_handler)
        except OSError as e:
            print(f"ERROR: Failed to set up file logging handler: {e}")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter(
        CONSOLE_FORMAT,
        datefmt=DATE_FORMAT,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
    ))
    console_handler.setLevel(LEVEL)
    handlers.append(console_handler)
    return handlers

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOGGER INITIALIZATION                                                      ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- close_handlers ---
# Flushes and closes handlers at shutdown. A console stream that is already
# closed (interpreter exit, captured stdout) raises ValueError on flush; skip it.
def close_handlers(handlers: List[logging.Handler]) -> None:
    for handler in handlers:
        try:
            handler.flush()
        except ValueError:
            pass
        handler.close()

logger = logging.getLogger("calendarbot")
logger.setLevel(LEVEL)

if not getattr(logger, "_initialized", False):
    active_log_file = find_log_file()
    _handlers = _build_handlers(active_log_file)
    _queue: Queue = Queue(-1)
    logger.addHandler(QueueHandler(_queue))
    _listener = QueueListener(_queue, *_handlers, respect_handler_level=True)
    _listener.start()
    logger._initialized = True

    # --- _shutdown_logging ---
    # Stops the listener thread and flushes buffered file records on exit.
    def _shutdown_logging():
        _listener.stop()
        close_handlers(_handlers)

    atexit.register(_shutdown_logging)

    logger.info(f"--- Logging Initialized ({platform.system()} {platform.release()}) ---")
    logger.info(f"Log Level: {'DEBUG' if DEBUG else 'INFO'}")
    if active_log_file:
        logger.info(f"Log File: {active_log_file}")
    else:
        logger.warning("File logging is disabled.")

# --- get_log_file_location ---
# Returns: The active log file path, or a note that logging is console only.
def get_log_file_location() -> str:
    return active_log_file or "Console only (File logging disabled)"
