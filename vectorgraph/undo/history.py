from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional
from blinker import Signal

if TYPE_CHECKING:
    from ..core.scene import Scene
    from ..core.shapes import GeometryObject


logger = logging.getLogger(__name__)

# A deep copy of a scene's object list, bottom-most first.
Snapshot = List["GeometryObject"]


class HistoryManager:
    """
    Linear undo/redo over whole-scene snapshots.

    Every entry is a deep copy of the scene's object list, taken by
    Scene.snapshot(). push() takes ownership of the list it is given, and
    undo()/redo() hand the stored list over to the caller, so neither
    stack shares objects with the live scene. Recording a new state
    invalidates the redo stack.
    """

    def __init__(self):
        self.undo_stack: List[Snapshot] = []
        self.redo_stack: List[Snapshot] = []
        # Fired whenever either stack changes.
        self.changed = Signal()

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def snapshot(self, scene: "Scene"):
        """Records the current state of the scene as an undo step."""
        self.push(scene.snapshot())

    def push(self, snapshot: Snapshot):
        """
        Records a snapshot captured earlier, e.g. at the start of a drag
        that has since mutated the scene.
        """
        self.undo_stack.append(snapshot)
        self.redo_stack.clear()
        logger.debug(
            f"History: pushed {len(snapshot)} objects, "
            f"{len(self.undo_stack)} undo steps"
        )
        self.changed.send(self)

    def undo(self, scene: "Scene") -> Optional[Snapshot]:
        """
        Steps back one state.

        Returns:
            The object list to restore, or None if there is nothing to
            undo. The caller takes ownership of the returned list.
        """
        if not self.undo_stack:
            return None
        self.redo_stack.append(scene.snapshot())
        state = self.undo_stack.pop()
        logger.debug(f"History: undo, {len(self.undo_stack)} steps left")
        self.changed.send(self)
        return state

    def redo(self, scene: "Scene") -> Optional[Snapshot]:
        """Steps forward one state. See undo()."""
        if not self.redo_stack:
            return None
        self.undo_stack.append(scene.snapshot())
        state = self.redo_stack.pop()
        logger.debug(f"History: redo, {len(self.redo_stack)} steps left")
        self.changed.send(self)
        return state

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
        self.changed.send(self)
