import pytest
from unittest.mock import MagicMock
from flextree.core.events import Signal

def test_signal_event():
    """Verify Signal behavior."""
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123)

    mock_handler.assert_called_once_with("data", 123)

    sig.disconnect(mock_handler)
    sig.emit("data2")
    assert mock_handler.call_count == 1

def test_signal_connect_is_idempotent():
    sig = Signal("dup")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.connect(mock_handler)
    sig.emit()

    assert len(sig) == 1
    assert mock_handler.call_count == 1

def test_failing_subscriber_does_not_stop_others():
    sig = Signal("failing")
    received = []

    def broken(value):
        raise RuntimeError("boom")

    sig.connect(broken)
    sig.connect(received.append)

    assert sig.emit(5) == 2
    assert received == [5]

def test_subscriber_may_disconnect_itself():
    sig = Signal("once")
    calls = []

    def once(value):
        calls.append(value)
        sig.disconnect(once)

    sig.connect(once)
    sig.emit(1)
    sig.emit(2)

    assert calls == [1]

def test_clear_drops_subscribers():
    sig = Signal()
    sig.connect(MagicMock())
    sig.clear()
    assert len(sig) == 0
