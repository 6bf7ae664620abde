from __future__ import annotations
import logging
from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np
from blinker import Signal
from ..core.geo.primitives import distance, normalize_rect
from ..core.shapes import (
    Circle,
    GeometryObject,
    Line,
    Point,
    Polygon,
    Rectangle,
)
from ..doceditor.prompts import NullPrompter, PolygonParams
from .events import EventType, InputEvent, MouseButton
from .gesture import Gesture, GestureKind
from .state import DRAW_MODES, EditorState, ToolMode

if TYPE_CHECKING:
    from ..core.scene import Scene
    from ..core.viewport import Viewport
    from ..doceditor.prompts import Prompter
    from ..undo import HistoryManager


logger = logging.getLogger(__name__)


class InteractionController:
    """
    Turns raw pointer events into scene edits.

    The tool mode is read from the EditorState at press time and kept in
    the Gesture, so switching tools in the middle of a drag only takes
    effect with the next press. Every edit that completes pushes exactly
    one undo step holding the scene as it was before the edit.
    """

    def __init__(
        self,
        scene: "Scene",
        viewport: "Viewport",
        history_manager: "HistoryManager",
        prompter: Optional["Prompter"] = None,
    ):
        self.scene = scene
        self.viewport = viewport
        self.history_manager = history_manager
        self.prompter: "Prompter" = prompter or NullPrompter()
        self.gesture: Optional[Gesture] = None

        # Sent with obj= and position= (screen) when the user right-clicks
        # an object.
        self.context_menu_requested = Signal()
        # Sent with message= for user-facing feedback.
        self.notification_requested = Signal()

    def handle_event(self, event: InputEvent, state: EditorState) -> bool:
        """
        Processes one input event. Returns True if the event was consumed.
        """
        if event.type == EventType.WHEEL:
            return self._on_wheel(event)

        world = self._to_world(event.pos)
        if world is None:
            return False

        if event.type == EventType.PRESS:
            return self._on_press(event, world, state)
        elif event.type == EventType.DRAG:
            return self._on_drag(event, world, state)
        elif event.type == EventType.RELEASE:
            return self._on_release(event, world, state)
        return False

    def reset(self):
        """Abandons any gesture in progress without touching history."""
        if self.gesture:
            logger.debug(f"Cancelling {self.gesture.kind.name} gesture")
        self.gesture = None
        if self.scene.preview is not None:
            self.scene.set_preview(None)
        if self.scene.marquee is not None:
            self.scene.set_marquee(None)

    def _to_world(
        self, screen: Tuple[float, float]
    ) -> Optional[Tuple[float, float]]:
        try:
            return self.viewport.screen_to_world(screen)
        except np.linalg.LinAlgError:
            logger.warning(
                f"Viewport {self.viewport!r} is not invertible, "
                "ignoring event"
            )
            return None

    def _notify(self, message: str):
        self.notification_requested.send(self, message=message)

    # Event dispatch
    def _on_wheel(self, event: InputEvent) -> bool:
        if event.wheel_delta == 0:
            return False
        try:
            self.viewport.zoom_at(event.pos, event.wheel_delta)
        except np.linalg.LinAlgError:
            logger.warning("Viewport is not invertible, ignoring zoom")
            return False
        return True

    def _on_press(
        self,
        event: InputEvent,
        raw: Tuple[float, float],
        state: EditorState,
    ) -> bool:
        if event.button == MouseButton.SECONDARY:
            self._right_click(event, raw)
            return True

        mode = state.mode
        if event.button == MouseButton.MIDDLE or mode == ToolMode.PAN:
            self.gesture = Gesture(
                GestureKind.PAN,
                mode,
                button=event.button,
                start_screen=event.pos,
                last_screen=event.pos,
            )
            return True

        world = state.snap(raw)
        if mode == ToolMode.SELECT:
            self._select_press(event, raw, world, mode)
        elif mode == ToolMode.POINT:
            self._add_point(world)
        elif mode == ToolMode.POLYGON:
            self._add_polygon(world, state)
        elif mode in DRAW_MODES:
            if mode == ToolMode.LINE:
                world = self._snap_to_point(raw, world)
            self.gesture = Gesture(
                GestureKind.DRAW,
                mode,
                button=event.button,
                anchor=world,
                start_screen=event.pos,
                last_screen=event.pos,
            )
        return True

    def _on_drag(
        self,
        event: InputEvent,
        raw: Tuple[float, float],
        state: EditorState,
    ) -> bool:
        gesture = self.gesture
        if gesture is None:
            return False

        if gesture.kind == GestureKind.PAN:
            last_x, last_y = gesture.last_screen
            self.viewport.pan(event.x - last_x, event.y - last_y)
        elif gesture.kind == GestureKind.DRAW:
            self._update_preview(gesture, raw, state)
        elif gesture.kind in (GestureKind.MOVE, GestureKind.RESIZE):
            self._drag_objects(gesture, state.snap(raw))
        elif gesture.kind == GestureKind.MARQUEE:
            self._update_marquee(gesture, event.pos)
        gesture.last_screen = event.pos
        return True

    def _on_release(
        self,
        event: InputEvent,
        raw: Tuple[float, float],
        state: EditorState,
    ) -> bool:
        gesture = self.gesture
        if gesture is None:
            return False
        if (
            event.button == MouseButton.SECONDARY
            and gesture.button != MouseButton.SECONDARY
        ):
            return False
        self.gesture = None

        if gesture.kind == GestureKind.DRAW:
            self._commit_preview(gesture, raw, state)
        elif gesture.kind in (GestureKind.MOVE, GestureKind.RESIZE):
            if gesture.changed and gesture.before is not None:
                self.history_manager.push(gesture.before)
                logger.debug(f"{gesture.kind.name} gesture recorded")
        elif gesture.kind == GestureKind.MARQUEE:
            self.scene.set_marquee(None)
        return True

    # Select mode
    def _select_press(
        self,
        event: InputEvent,
        raw: Tuple[float, float],
        world: Tuple[float, float],
        mode: ToolMode,
    ):
        found = self.scene.find_handle_at(raw)
        if found:
            target, handle = found
            logger.debug(f"Resizing {target!r} by {handle}")
            self.gesture = Gesture(
                GestureKind.RESIZE,
                mode,
                target=target,
                handle=handle,
                last_world=world,
                start_screen=event.pos,
                last_screen=event.pos,
                before=self.scene.snapshot(),
            )
            return

        hit = self.scene.hit_test(raw)
        if hit is not None:
            if not event.shift and not hit.selected:
                self.scene.select(hit, exclusive=True)
            elif not hit.selected:
                self.scene.select(hit)
            logger.debug(f"Moving selection, started on {hit!r}")
            self.gesture = Gesture(
                GestureKind.MOVE,
                mode,
                target=hit,
                last_world=world,
                start_screen=event.pos,
                last_screen=event.pos,
                before=self.scene.snapshot(),
            )
            return

        if not event.shift:
            self.scene.clear_selection()
        self.gesture = Gesture(
            GestureKind.MARQUEE,
            mode,
            start_screen=event.pos,
            last_screen=event.pos,
            shift=event.shift,
            selection_before=self.scene.get_selection(),
        )
        self.scene.set_marquee((event.x, event.y, 0.0, 0.0))

    def _drag_objects(self, gesture: Gesture, world: Tuple[float, float]):
        dx = world[0] - gesture.last_world[0]
        dy = world[1] - gesture.last_world[1]
        if dx == 0 and dy == 0:
            return
        if gesture.kind == GestureKind.RESIZE:
            assert gesture.target is not None
            gesture.target.resize(gesture.handle, dx, dy)
        else:
            for obj in self.scene.get_selection():
                obj.move(dx, dy)
        gesture.last_world = world
        gesture.changed = True
        self.scene.notify_changed()

    def _update_marquee(self, gesture: Gesture, pos: Tuple[float, float]):
        rect = normalize_rect(gesture.start_screen, pos)
        self.scene.set_marquee(rect)
        hits = self.scene.objects_in_screen_rect(rect, self.viewport)
        keep = gesture.selection_before if gesture.shift else []
        self.scene.select_only(keep + hits)

    def _right_click(self, event: InputEvent, raw: Tuple[float, float]):
        hit = self.scene.hit_test(raw)
        if hit is None:
            self.scene.clear_selection()
            return
        if not hit.selected:
            self.scene.select(hit, exclusive=True)
        self.context_menu_requested.send(self, obj=hit, position=event.pos)

    # Drawing tools
    def _snap_to_point(
        self, raw: Tuple[float, float], world: Tuple[float, float]
    ) -> Tuple[float, float]:
        """Pulls a line endpoint onto a Point under the raw pointer."""
        point = self.scene.find_point_at(raw)
        if point is None:
            return world
        return point.position

    def _add_point(self, world: Tuple[float, float]):
        label = f"P{len(self.scene)}"
        self.history_manager.snapshot(self.scene)
        self.scene.add(Point(world[0], world[1], name=label))

    def _add_polygon(self, world: Tuple[float, float], state: EditorState):
        answer = self.prompter.ask_polygon_params()
        if answer is None:
            logger.debug("Polygon prompt cancelled")
            return
        try:
            params = PolygonParams.parse(*answer)
        except ValueError as e:
            logger.warning(f"Rejected polygon parameters {answer!r}: {e}")
            self._notify(str(e))
            return
        polygon = Polygon.regular(
            world,
            params.sides,
            params.edge_length,
            color=state.color,
            stroke_width=state.stroke_width,
        )
        self.history_manager.snapshot(self.scene)
        self.scene.add(polygon)

    def _build_shape(
        self,
        gesture: Gesture,
        raw: Tuple[float, float],
        state: EditorState,
    ) -> GeometryObject:
        end = state.snap(raw)
        start = gesture.anchor
        style = dict(color=state.color, stroke_width=state.stroke_width)
        if gesture.mode == ToolMode.RECTANGLE:
            x, y, w, h = normalize_rect(start, end)
            return Rectangle(x, y, w, h, **style)
        elif gesture.mode == ToolMode.LINE:
            end = self._snap_to_point(raw, end)
            return Line(start[0], start[1], end[0], end[1], **style)
        return Circle(start[0], start[1], distance(start, end), **style)

    def _update_preview(
        self,
        gesture: Gesture,
        raw: Tuple[float, float],
        state: EditorState,
    ):
        self.scene.set_preview(self._build_shape(gesture, raw, state))
        gesture.changed = True

    def _commit_preview(
        self,
        gesture: Gesture,
        raw: Tuple[float, float],
        state: EditorState,
    ):
        # A click without any drag leaves nothing behind.
        if not gesture.changed:
            return
        shape = self._build_shape(gesture, raw, state)
        self.scene.set_preview(None)
        self.history_manager.snapshot(self.scene)
        self.scene.add(shape)
        logger.debug(f"Committed {shape!r}")
