from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple, TYPE_CHECKING
from blinker import Signal
from .geo.primitives import Rect, rects_intersect
from .handle import Handle
from .shapes import GeometryObject, Point

if TYPE_CHECKING:
    from .viewport import Viewport


logger = logging.getLogger(__name__)


class Scene:
    """
    The ordered collection of objects being edited.

    List order is z-order: the last object is drawn on top. The selection
    is not stored separately; it is the set of objects whose `selected`
    flag is set, so it survives reordering.

    Besides the committed objects, the scene holds two transient things
    that are never persisted or snapshotted: the preview object of a draw
    gesture in progress, and the screen-space marquee rectangle of a
    drag-select.
    """

    def __init__(self, objects: Optional[Iterable[GeometryObject]] = None):
        self.objects: List[GeometryObject] = list(objects or [])
        self.preview: Optional[GeometryObject] = None
        self.marquee: Optional[Rect] = None

        # Fired when objects are added, removed, reordered or mutated.
        self.changed = Signal()
        # Fired when the set of selected objects may have changed.
        self.selection_changed = Signal()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def notify_changed(self):
        self.changed.send(self)

    def add(self, obj: GeometryObject) -> GeometryObject:
        """Appends an object on top of all others."""
        self.objects.append(obj)
        logger.debug(f"Added {obj!r}, scene has {len(self.objects)} objects")
        self.changed.send(self)
        return obj

    def remove_selected(self) -> List[GeometryObject]:
        """Removes all selected objects and returns them."""
        removed = self.get_selection()
        if not removed:
            return removed
        self.objects = [o for o in self.objects if not o.selected]
        self.changed.send(self)
        self.selection_changed.send(self)
        return removed

    def layers(self) -> List[GeometryObject]:
        """The objects as a layer list shows them, topmost first."""
        return list(reversed(self.objects))

    # Selection
    def get_selection(self) -> List[GeometryObject]:
        return [o for o in self.objects if o.selected]

    def has_selection(self) -> bool:
        return any(o.selected for o in self.objects)

    def select(self, obj: GeometryObject, exclusive: bool = False):
        """
        Selects an object. With `exclusive`, every other object is
        deselected first.
        """
        if exclusive:
            for o in self.objects:
                o.selected = o is obj
        else:
            obj.selected = True
        self.selection_changed.send(self)

    def select_only(self, objs: Iterable[GeometryObject]):
        """Sets the selection to exactly the given objects."""
        wanted_ids = {id(w) for w in objs}
        for o in self.objects:
            o.selected = id(o) in wanted_ids
        self.selection_changed.send(self)

    def clear_selection(self):
        if not self.has_selection():
            return
        for o in self.objects:
            o.selected = False
        self.selection_changed.send(self)

    # Hit testing
    def hit_test(self, point: Tuple[float, float]) -> Optional[GeometryObject]:
        """Returns the topmost object containing the world point."""
        for obj in reversed(self.objects):
            if obj.contains(point):
                return obj
        return None

    def find_point_at(self, point: Tuple[float, float]) -> Optional[Point]:
        """Returns the topmost Point whose pick radius covers the point."""
        for obj in reversed(self.objects):
            if isinstance(obj, Point) and obj.contains(point):
                return obj
        return None

    def find_handle_at(
        self, point: Tuple[float, float]
    ) -> Optional[Tuple[GeometryObject, Handle]]:
        """
        Returns the first selected object, in scene order, that has a
        handle under the world point, together with that handle.
        """
        for obj in self.objects:
            if not obj.selected:
                continue
            handle = obj.get_handle_at(point)
            if not handle.is_none():
                return obj, handle
        return None

    def objects_in_screen_rect(
        self, rect: Rect, viewport: "Viewport"
    ) -> List[GeometryObject]:
        """
        Returns all objects whose bounds, mapped to screen space,
        intersect the given screen rectangle.
        """
        return [
            o
            for o in self.objects
            if rects_intersect(viewport.world_rect_to_screen(o.bounds()), rect)
        ]

    # Layer order
    def move_layer(self, obj: GeometryObject, offset: int) -> bool:
        """
        Swaps an object with its neighbour. A positive offset moves it
        toward the top. Returns False if the object is already at the end
        in that direction.
        """
        if obj not in self.objects or offset == 0:
            return False
        index = self.objects.index(obj)
        target = index + (1 if offset > 0 else -1)
        if not 0 <= target < len(self.objects):
            return False
        objs = self.objects
        objs[index], objs[target] = objs[target], objs[index]
        self.changed.send(self)
        return True

    # Snapshots
    def snapshot(self) -> List[GeometryObject]:
        """Returns a deep copy of the object list."""
        return [o.copy() for o in self.objects]

    def restore(self, objects: List[GeometryObject]):
        """
        Replaces the whole object list. The scene takes ownership of the
        given list. Transient state is dropped.
        """
        self.objects = objects
        self.preview = None
        self.marquee = None
        self.changed.send(self)
        self.selection_changed.send(self)

    # Transient state
    def set_preview(self, obj: Optional[GeometryObject]):
        self.preview = obj
        self.changed.send(self)

    def set_marquee(self, rect: Optional[Rect]):
        self.marquee = rect
        self.changed.send(self)
