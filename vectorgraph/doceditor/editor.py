from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional
from blinker import Signal
from ..core.scene import Scene
from ..core.viewport import Viewport
from ..undo import HistoryManager
from ..workbench.interaction import InteractionController
from ..workbench.state import EditorState, ToolMode
from .edit_cmd import EditCmd
from .file_cmd import FileCmd
from .prompts import NullPrompter

if TYPE_CHECKING:
    from ..core.config import EditorConfig
    from ..core.shapes import GeometryObject
    from ..workbench.events import InputEvent
    from .prompts import Prompter


logger = logging.getLogger(__name__)


class SceneEditor:
    """
    The central, non-UI controller for a drawing.

    It owns the scene, the viewport, the undo history and the interaction
    controller, and is what a host shell drives: it forwards raw input
    events, calls undo/redo, and invokes the namespaced command handlers
    (`edit`, `file`) from its menus.
    """

    def __init__(
        self,
        config: Optional["EditorConfig"] = None,
        prompter: Optional["Prompter"] = None,
        scene: Optional[Scene] = None,
    ):
        """
        Initializes the SceneEditor.

        Args:
            config: The user configuration supplying the initial drawing
                    style and grid settings. Built-in defaults if None.
            prompter: Asks the user for values. If None, every question is
                      treated as cancelled.
            scene: An optional existing Scene. If None, a new one is
                   created.
        """
        self.config = config
        self.prompter: "Prompter" = prompter or NullPrompter()
        self.scene = scene or Scene()
        self.viewport = Viewport()
        self.history_manager = HistoryManager()
        self.state = (
            EditorState.from_config(config) if config else EditorState()
        )
        self.controller = InteractionController(
            self.scene, self.viewport, self.history_manager, self.prompter
        )

        # Signals
        self.notification_requested = Signal()  # For UI feedback
        self.context_menu_requested = self.controller.context_menu_requested
        self.controller.notification_requested.connect(
            self._on_controller_notification
        )

        # Instantiate and link command handlers.
        self.edit = EditCmd(self)
        self.file = FileCmd(self)

    def _on_controller_notification(self, sender, message: str = ""):
        self.notification_requested.send(self, message=message)

    def notify(self, message: str):
        self.notification_requested.send(self, message=message)

    def apply_event(self, event: "InputEvent") -> bool:
        """Feeds one raw input event into the interaction controller."""
        return self.controller.handle_event(event, self.state)

    def snapshot(self):
        """
        Cancels any gesture in progress, then records the current scene as
        an undo step.
        """
        self.controller.reset()
        self.history_manager.snapshot(self.scene)

    def replace_objects(self, objects: List["GeometryObject"]):
        """
        Swaps in a new object list, cancelling any gesture that might
        still reference the old objects.
        """
        self.controller.reset()
        self.scene.restore(objects)

    def undo(self) -> bool:
        """Returns False if there was nothing to undo."""
        self.controller.reset()
        state = self.history_manager.undo(self.scene)
        if state is None:
            return False
        self.replace_objects(state)
        return True

    def redo(self) -> bool:
        """Returns False if there was nothing to redo."""
        self.controller.reset()
        state = self.history_manager.redo(self.scene)
        if state is None:
            return False
        self.replace_objects(state)
        return True

    def get_objects(self) -> List["GeometryObject"]:
        return list(self.scene.objects)

    def get_selection(self) -> List["GeometryObject"]:
        return self.scene.get_selection()

    def get_layers(self) -> List["GeometryObject"]:
        """The objects in layer-list order, topmost first."""
        return self.scene.layers()

    def set_mode(self, mode: ToolMode):
        """Selects a tool. Takes effect with the next press."""
        if self.state.mode != mode:
            logger.debug(f"Tool mode changed to {mode.name}")
        self.state.mode = mode

    def set_snap_to_grid(self, enabled: bool):
        self.state.snap_to_grid = enabled
        if self.config:
            self.config.set_snap_to_grid(enabled)

    def set_viewport(
        self,
        tx: Optional[float] = None,
        ty: Optional[float] = None,
        scale: Optional[float] = None,
    ):
        """
        Sets the pan offset and/or scale directly. The scale is clamped
        to the allowed range. Values left as None are unchanged.
        """
        vp = self.viewport
        tx = vp.tx if tx is None else tx
        ty = vp.ty if ty is None else ty
        if scale is not None:
            vp.set_scale(scale)
        vp.set_offset(tx, ty)
