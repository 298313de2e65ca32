from typing import Any, Literal, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, Field
from loguru import logger
from .events import Signal

# --- Settings Models ---
class TreeViewSettings(BaseModel):
    """
    Pass-through settings for renderers. None of these change the
    projection or reorder logic; ``indent``, ``node_width`` and
    ``scrollable`` feed ``TreeViewModel.content_width`` and row offsets.
    """
    model_config = ConfigDict(validate_assignment=True)

    node_width: float = Field(default=300.0, gt=0)
    scrollable: bool = True
    show_lines: bool = False
    line_color: Optional[str] = None
    indent: float = Field(default=16.0, ge=0)
    scroll_axis: Literal["horizontal", "vertical"] = "horizontal"

class LoggingSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = False
    log_dir: Optional[str] = None

class FlexTreeConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    view: TreeViewSettings = Field(default_factory=TreeViewSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

# --- Manager ---
class ConfigManager:
    """
    Manages tree view configuration with optional persistence and reactivity.

    Without a ``filepath`` the configuration lives in memory only.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = FlexTreeConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> FlexTreeConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if section not in FlexTreeConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        setattr(section_obj, key, value)
        self._save()
        self.on_changed.emit(section, key, getattr(section_obj, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if not self.filepath:
            return
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = FlexTreeConfig.model_validate(raw)
                logger.debug(f"Loaded config from {self.filepath}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
