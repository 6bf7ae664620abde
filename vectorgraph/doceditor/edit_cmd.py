from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional
from .prompts import parse_stroke_width

if TYPE_CHECKING:
    from ..core.shapes import GeometryObject
    from ..shared.util.colors import ColorRGBA
    from .editor import SceneEditor


logger = logging.getLogger(__name__)


class EditCmd:
    """
    Handles style, naming, deletion, layer order and selection commands.

    Commands that change the selected objects record exactly one undo
    step before the first object is touched, and none at all if nothing
    is selected or the user cancels.
    """

    def __init__(self, editor: "SceneEditor"):
        self._editor = editor

    @property
    def _scene(self):
        return self._editor.scene

    def set_color(self, color: Optional["ColorRGBA"] = None) -> bool:
        """
        Applies a stroke color to the selection and makes it the current
        drawing color. Asks the user if no color is given.
        """
        editor = self._editor
        if color is None:
            color = editor.prompter.ask_color(editor.state.color)
            if color is None:
                return False

        editor.state.color = color
        if editor.config:
            editor.config.set_default_color(color)

        selection = self._scene.get_selection()
        if not selection:
            return False
        editor.snapshot()
        for obj in selection:
            obj.color = color
        self._scene.notify_changed()
        return True

    def set_stroke_width(self, width: Any = None) -> bool:
        """
        Applies a stroke width to the selection and makes it the current
        drawing width. Asks the user if no width is given. Invalid input
        is reported through the editor's notification signal.
        """
        editor = self._editor
        if width is None:
            width = editor.prompter.ask_text(
                _("Stroke width"), str(editor.state.stroke_width)
            )
            if width is None:
                return False
        try:
            value = parse_stroke_width(width)
        except ValueError as e:
            logger.warning(f"Rejected stroke width {width!r}: {e}")
            editor.notify(str(e))
            return False

        editor.state.stroke_width = value
        if editor.config:
            editor.config.set_default_stroke_width(value)

        selection = self._scene.get_selection()
        if not selection:
            return False
        editor.snapshot()
        for obj in selection:
            obj.stroke_width = value
        self._scene.notify_changed()
        return True

    def rename_selected(self, name: Optional[str] = None) -> bool:
        """Gives every selected object the same new name."""
        editor = self._editor
        selection = self._scene.get_selection()
        if not selection:
            return False
        if name is None:
            name = editor.prompter.ask_text(_("Rename"), selection[0].name)
        if name is None or not name.strip():
            return False

        editor.snapshot()
        for obj in selection:
            obj.name = name.strip()
        self._scene.notify_changed()
        return True

    def delete_selected(self) -> bool:
        if not self._scene.has_selection():
            return False
        self._editor.snapshot()
        removed = self._scene.remove_selected()
        logger.debug(f"Deleted {len(removed)} objects")
        return True

    def move_layer(self, offset: int) -> bool:
        """
        Moves the first selected object one step toward the top (positive
        offset) or the bottom (negative offset) of the stack.
        """
        selection = self._scene.get_selection()
        if not selection or offset == 0:
            return False
        obj = selection[0]
        objects = self._scene.objects
        target = objects.index(obj) + (1 if offset > 0 else -1)
        if not 0 <= target < len(objects):
            return False
        self._editor.snapshot()
        return self._scene.move_layer(obj, offset)

    def bring_forward(self) -> bool:
        return self.move_layer(1)

    def send_backward(self) -> bool:
        return self.move_layer(-1)

    def select_all(self):
        self._scene.select_only(self._scene.objects)

    def clear_selection(self):
        self._scene.clear_selection()

    def select_only(self, objs: Iterable["GeometryObject"]):
        """Sets the selection to exactly the given objects."""
        self._scene.select_only(objs)
