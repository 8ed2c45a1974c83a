import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import seqlog

from core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging_to_console(level=logging.INFO):
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_console", False) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._console = True
    root.addHandler(handler)


def setup_logging_to_file(
    app: str,
    level=logging.INFO,
    logger: Optional[logging.Logger] = None,
    settings: Optional[Settings] = None,
):
    """Ship logs of `app` to Seq, or to a rotating file when no Seq server is set."""
    settings = settings or get_settings()
    logger = logger or logging.getLogger()

    if settings.SEQ_SERVER_URL:
        seqlog.log_to_seq(
            server_url=settings.SEQ_SERVER_URL,
            api_key=settings.SEQ_SERVER_API_KEY,
            level=level,
            batch_size=10,
            auto_flush_timeout=10,
            override_root_logger=True,
        )
        seqlog.set_global_log_properties(
            Application=app, Environment=settings.ENVIRONMENT_NAME
        )
        logger.setLevel(level)
        return

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, f"{app}.log"),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
