import logging

import pytest

from histnd.io.logging_utils import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_histnd_logger():
    """Isolate tests from handlers bound to an earlier test's (closed) capture streams."""
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    yield
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
