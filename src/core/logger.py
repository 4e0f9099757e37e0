"""Application logging: console + rotating file, with optional masking."""

import logging
import logging.handlers
import re
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"
LOGGER_NAME = "postscroll"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


class SensitiveDataFilter(logging.Filter):
    """Hide commenter e-mail addresses and URL query strings in log lines."""

    EMAIL_PATTERN = re.compile(r'[\w.+-]+@[\w-]+(\.[\w-]+)+')
    QUERY_PATTERN = re.compile(r'(https?://[^\s?]+)\?\S*')

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            masked = self.EMAIL_PATTERN.sub('[EMAIL]', record.msg)
            record.msg = self.QUERY_PATTERN.sub(r'\1?[QUERY]', masked)
        return True


def setup_logger(log_level: str = "INFO", mask_logs: bool = True) -> logging.Logger:
    """Configure the "postscroll" logger once and return it.

    Logs go to stderr and to logs/postscroll.log (5 MB x 3 backups).
    Calling it again returns the already configured logger untouched.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT)

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handlers = [
        logging.StreamHandler(),
        logging.handlers.RotatingFileHandler(
            LOG_DIR / "postscroll.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        ),
    ]

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        if mask_logs:
            handler.addFilter(SensitiveDataFilter())
        logger.addHandler(handler)

    return logger


def install_qt_message_handler(logger: logging.Logger) -> None:
    """Route Qt's own warnings (qWarning, qCritical...) into the app logger."""
    from PyQt6.QtCore import QtMsgType, qInstallMessageHandler

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def handler(msg_type, context, message):
        logger.log(levels.get(msg_type, logging.WARNING), f"[Qt] {message}")

    qInstallMessageHandler(handler)
