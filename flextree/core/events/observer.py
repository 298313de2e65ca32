from loguru import logger
from typing import Callable, List


class Signal:
    """
    Synchronous observer used for every notification in the tree model.

    Subscribers are called in connection order. A failing subscriber is
    logged and skipped; the remaining subscribers still receive the event.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable):
        """Connect a callback function to this signal."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def clear(self):
        """Drop every subscriber."""
        self._subscribers.clear()

    def __len__(self) -> int:
        return len(self._subscribers)

    def emit(self, *args, **kwargs) -> int:
        """
        Broadcast arguments to all subscribers.

        Returns:
            Number of subscribers that were notified.
        """
        # Snapshot so a subscriber may disconnect itself while handling.
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")
        return len(self._subscribers)
