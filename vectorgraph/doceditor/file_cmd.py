from __future__ import annotations
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional
import cairo
from ..core.serialize import (
    FILE_EXTENSION,
    SceneFormatError,
    deserialize_scene,
    serialize_scene,
)
from ..render.scene_renderer import SceneRenderer, export_png

if TYPE_CHECKING:
    from .editor import SceneEditor


logger = logging.getLogger(__name__)

DEFAULT_EXPORT_SIZE = (800, 600)


class FileCmd:
    """Handles saving, loading and image export."""

    def __init__(self, editor: "SceneEditor"):
        self._editor = editor
        self.file_path: Optional[Path] = None

    def save(self, path: Path) -> Optional[Path]:
        """
        Writes the scene to a file, adding the .graph extension if it is
        missing. Returns the path written, or None on failure.
        """
        if path.suffix.lower() != FILE_EXTENSION:
            path = path.with_name(path.name + FILE_EXTENSION)
        data = serialize_scene(self._editor.scene.objects)
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Saving to {path} failed", exc_info=e)
            self._editor.notify(
                _("Save failed: {error}").format(error=e.strerror or e)
            )
            return None

        self.file_path = path
        logger.info(
            f"Saved {len(self._editor.scene)} objects to {path}"
        )
        self._editor.notify(_("Saved {name}").format(name=path.name))
        return path

    def load(self, path: Path) -> bool:
        """
        Replaces the scene with the contents of a file and clears the undo
        history. On failure, the scene and history are left untouched.
        """
        try:
            objects = deserialize_scene(path.read_bytes())
        except (OSError, SceneFormatError) as e:
            logger.error(f"Loading {path} failed", exc_info=e)
            self._editor.notify(
                _("Could not open {name}: {error}").format(
                    name=path.name, error=e
                )
            )
            return False

        self._editor.replace_objects(objects)
        self._editor.history_manager.clear()
        self.file_path = path
        logger.info(f"Loaded {len(objects)} objects from {path}")
        return True

    def export_png(
        self,
        path: Path,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Optional[Path]:
        """
        Exports the current view as a PNG image. The size defaults to the
        viewport size if the host has set one.
        """
        editor = self._editor
        vp = editor.viewport
        default_w, default_h = DEFAULT_EXPORT_SIZE
        width = width or int(vp.width or default_w)
        height = height or int(vp.height or default_h)

        renderer = SceneRenderer()
        if editor.config:
            renderer.show_grid = editor.config.show_grid
            renderer.grid_size = editor.config.grid_size
        try:
            written = export_png(
                path, editor.scene, vp, width, height, renderer
            )
        except (OSError, cairo.Error, ValueError) as e:
            logger.error(f"PNG export to {path} failed", exc_info=e)
            editor.notify(_("Export failed: {error}").format(error=e))
            return None

        editor.notify(
            _("Export successful: {name}").format(name=written.name)
        )
        return written
