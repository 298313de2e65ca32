from .errors import TreeError, InvalidIndexError, CycleError
from .events import Signal
from .config import ConfigManager, FlexTreeConfig, TreeViewSettings, LoggingSettings
from .logging import setup_logging

__all__ = [
    "TreeError",
    "InvalidIndexError",
    "CycleError",
    "Signal",
    "ConfigManager",
    "FlexTreeConfig",
    "TreeViewSettings",
    "LoggingSettings",
    "setup_logging",
]
