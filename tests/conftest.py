import pytest
from loguru import logger

from timely.settings import settings


@pytest.fixture(autouse=True)
def quiet_logging():
    # Keep test runs from writing log files into the user's log directory.
    original = settings.log_to_file
    settings.log_to_file = False
    yield
    settings.log_to_file = original
    logger.remove()
