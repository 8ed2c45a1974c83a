import logging
import os
from unittest.mock import patch

from log import setup_logging_to_file


def test_logs_to_rotating_file_without_seq(settings):
    logger = logging.getLogger("tests.file_logger")

    setup_logging_to_file(app="unit", level=logging.INFO, logger=logger, settings=settings)
    try:
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        with open(os.path.join(settings.LOG_DIR, "unit.log")) as f:
            assert "hello" in f.read()
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


@patch("log.seqlog")
def test_logs_to_seq_when_configured(mock_seqlog, settings):
    settings.SEQ_SERVER_URL = "http://seq:5341"
    settings.SEQ_SERVER_API_KEY = "key"

    setup_logging_to_file(
        app="unit",
        level=logging.WARNING,
        logger=logging.getLogger("tests.seq_logger"),
        settings=settings,
    )

    mock_seqlog.log_to_seq.assert_called_once()
    assert mock_seqlog.log_to_seq.call_args.kwargs["server_url"] == "http://seq:5341"
    mock_seqlog.set_global_log_properties.assert_called_once_with(
        Application="unit", Environment=settings.ENVIRONMENT_NAME
    )
