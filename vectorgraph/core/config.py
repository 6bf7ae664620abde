import logging
from pathlib import Path
from typing import Any, Dict
import yaml
from blinker import Signal
from ..shared.util.colors import BLACK, ColorRGBA, from_hex, to_hex
from .shapes import DEFAULT_STROKE_WIDTH
from .viewport import DEFAULT_GRID_SIZE

logger = logging.getLogger(__name__)


class EditorConfig:
    """User preferences that survive between sessions."""

    def __init__(self):
        self.default_color: ColorRGBA = BLACK
        self.default_stroke_width: float = DEFAULT_STROKE_WIDTH
        self.grid_size: float = DEFAULT_GRID_SIZE
        self.snap_to_grid: bool = False
        self.show_grid: bool = True
        self.changed = Signal()

    def set_default_color(self, color: ColorRGBA):
        if self.default_color == color:
            return
        self.default_color = color
        self.changed.send(self)

    def set_default_stroke_width(self, width: float):
        if width <= 0:
            raise ValueError("Stroke width must be positive.")
        if self.default_stroke_width == width:
            return
        self.default_stroke_width = width
        self.changed.send(self)

    def set_grid_size(self, size: float):
        if size <= 0:
            raise ValueError("Grid size must be positive.")
        if self.grid_size == size:
            return
        self.grid_size = size
        self.changed.send(self)

    def set_snap_to_grid(self, enabled: bool):
        if self.snap_to_grid == enabled:
            return
        self.snap_to_grid = enabled
        self.changed.send(self)

    def set_show_grid(self, enabled: bool):
        if self.show_grid == enabled:
            return
        self.show_grid = enabled
        self.changed.send(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "default_color": to_hex(self.default_color),
            "default_stroke_width": self.default_stroke_width,
            "grid_size": self.grid_size,
            "snap_to_grid": self.snap_to_grid,
            "show_grid": self.show_grid,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        config = cls()
        if "default_color" in data:
            config.default_color = from_hex(str(data["default_color"]))
        config.default_stroke_width = float(
            data.get("default_stroke_width", config.default_stroke_width)
        )
        config.grid_size = float(data.get("grid_size", config.grid_size))
        config.snap_to_grid = bool(
            data.get("snap_to_grid", config.snap_to_grid)
        )
        config.show_grid = bool(data.get("show_grid", config.show_grid))
        if config.default_stroke_width <= 0 or config.grid_size <= 0:
            raise ValueError("Stroke width and grid size must be positive.")
        return config


class ConfigManager:
    """
    Loads the EditorConfig from a YAML file and writes it back whenever
    it changes.
    """

    def __init__(self, filepath: Path):
        self.filepath = filepath
        self.config: EditorConfig = EditorConfig()
        self.load()

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.config.to_dict(), f)
        logger.debug(f"Config saved to {self.filepath}")

    def _on_config_changed(self, sender, **kwargs):
        try:
            self.save()
        except OSError as e:
            logger.error(f"Could not save config: {e}", exc_info=True)

    def load(self) -> EditorConfig:
        if self.filepath.exists():
            try:
                with open(self.filepath, "r") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.warning(f"Could not parse {self.filepath}: {e}")
                data = None
            if data:
                try:
                    self.config = EditorConfig.from_dict(data)
                except (TypeError, ValueError, AttributeError) as e:
                    logger.warning(
                        f"Ignoring invalid config file {self.filepath}: {e}"
                    )
                    self.config = EditorConfig()
            else:
                self.config = EditorConfig()
        else:
            self.config = EditorConfig()
        self.config.changed.connect(self._on_config_changed)
        return self.config
