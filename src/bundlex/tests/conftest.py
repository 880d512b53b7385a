import pytest
from loguru import logger

from bundlex import utils


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    utils._LOGGER_CONFIGURED = False
