import threading

import pytest


@pytest.fixture
def release():
    # lets slow stub providers finish at teardown so no worker thread outlives the test session
    event = threading.Event()
    yield event
    event.set()
