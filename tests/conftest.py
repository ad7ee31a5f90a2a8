"""Pytest configuration for microproto tests."""

import pytest
import signal
import sys


def timeout_handler(signum, frame):
    """Handle timeout signal."""
    pytest.fail("Test timed out")


@pytest.fixture(autouse=True)
def test_timeout(request):
    """Apply a timeout to all tests, so a runaway reentrant getter fails instead of hanging.

    Default is 10 seconds, but tests can use a longer timeout by marking them:
    @pytest.mark.timeout(30)  # 30 second timeout
    """
    if sys.platform != "win32":
        marker = request.node.get_closest_marker("timeout")
        timeout_seconds = marker.args[0] if marker else 10

        # Set up timeout handler (Unix only)
        old_handler = signal.signal(signal.SIGALRM, timeout_handler)
        signal.alarm(timeout_seconds)
        yield
        signal.alarm(0)  # Cancel the alarm
        signal.signal(signal.SIGALRM, old_handler)
    else:
        yield


@pytest.fixture
def realm():
    """A fresh realm, so tests that augment Object.prototype stay isolated."""
    from microproto import Realm

    return Realm()
