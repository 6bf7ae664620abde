from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING
import cairo
from ..core.shapes import GeometryObject, Point
from ..core.viewport import DEFAULT_GRID_SIZE
from ..shared.util.colors import (
    AXIS,
    BLACK,
    BLUE,
    GRID,
    HIGHLIGHT,
    MARQUEE_FILL,
    MARQUEE_STROKE,
    RED,
    WHITE,
    ColorRGBA,
)

if TYPE_CHECKING:
    from ..core.scene import Scene
    from ..core.viewport import Viewport


logger = logging.getLogger(__name__)

# Handle markers have a fixed size in pixels, whatever the zoom.
HANDLE_SIZE = 6.0
# The grid is only drawn within this distance from the origin.
GRID_EXTENT = 10000.0
LABEL_OFFSET = 6.0
LABEL_FONT_SIZE = 12.0


def _set_color(ctx: cairo.Context, color: ColorRGBA):
    ctx.set_source_rgba(*color)


def render_selection_overlay(
    ctx: cairo.Context, obj: GeometryObject, viewport: "Viewport"
):
    """
    Draws the dashed highlight outline and the handle markers of a
    selected object. Both are 1 pixel wide in screen space.

    Args:
        ctx: A cairo context in screen space.
        obj: The selected object.
        viewport: Maps the object's world coordinates to the screen.
    """
    matrix = viewport.get_matrix()
    ctx.save()
    ctx.transform(matrix.to_cairo())
    obj.trace(ctx)
    # The path is already in device space, so stroking with an identity
    # matrix keeps the overlay at 1 pixel.
    ctx.identity_matrix()
    _set_color(ctx, HIGHLIGHT)
    ctx.set_line_width(1.0)
    ctx.set_dash((5.0,))
    ctx.set_line_cap(cairo.LINE_CAP_BUTT)
    ctx.set_line_join(cairo.LINE_JOIN_BEVEL)
    ctx.stroke()
    ctx.restore()

    half = HANDLE_SIZE / 2
    ctx.save()
    ctx.set_line_width(1.0)
    for _handle, pos in obj.handle_positions():
        sx, sy = matrix.transform_point(pos)
        ctx.rectangle(sx - half, sy - half, HANDLE_SIZE, HANDLE_SIZE)
        _set_color(ctx, WHITE)
        ctx.fill_preserve()
        _set_color(ctx, BLACK)
        ctx.stroke()
    ctx.restore()


class SceneRenderer:
    """Draws a scene through a viewport onto a cairo context."""

    def __init__(
        self,
        show_grid: bool = True,
        grid_size: float = DEFAULT_GRID_SIZE,
    ):
        self.show_grid = show_grid
        self.grid_size = grid_size

    def render(
        self,
        ctx: cairo.Context,
        scene: "Scene",
        viewport: "Viewport",
        width: float,
        height: float,
        overlays: bool = True,
    ):
        """
        Renders the background, the grid, all objects and, if `overlays`
        is set, the preview object and the marquee rectangle.
        """
        ctx.save()
        _set_color(ctx, WHITE)
        ctx.rectangle(0, 0, width, height)
        ctx.fill()
        ctx.restore()

        if self.show_grid:
            self._render_grid(ctx, viewport, width, height)

        for obj in scene.objects:
            self.render_object(ctx, obj, viewport)
            if obj.selected:
                render_selection_overlay(ctx, obj, viewport)

        if not overlays:
            return
        if scene.preview is not None:
            self.render_object(ctx, scene.preview, viewport)
        if scene.marquee is not None:
            self._render_marquee(ctx, scene.marquee)

    def render_object(
        self, ctx: cairo.Context, obj: GeometryObject, viewport: "Viewport"
    ):
        ctx.save()
        ctx.transform(viewport.get_matrix().to_cairo())
        if isinstance(obj, Point):
            self._render_point(ctx, obj)
        else:
            obj.trace(ctx)
            _set_color(ctx, obj.color)
            ctx.set_line_width(obj.stroke_width)
            ctx.set_line_cap(cairo.LINE_CAP_ROUND)
            ctx.set_line_join(cairo.LINE_JOIN_ROUND)
            ctx.stroke()
        ctx.restore()

    def _render_point(self, ctx: cairo.Context, point: Point):
        # Points ignore their own color.
        point.trace(ctx)
        _set_color(ctx, BLUE if point.selected else RED)
        ctx.set_line_width(point.stroke_width)
        ctx.set_line_cap(cairo.LINE_CAP_ROUND)
        ctx.stroke()
        if point.label:
            _set_color(ctx, BLACK)
            ctx.set_font_size(LABEL_FONT_SIZE)
            ctx.move_to(point.x + LABEL_OFFSET, point.y - LABEL_OFFSET)
            ctx.show_text(point.label)

    def _render_grid(
        self,
        ctx: cairo.Context,
        viewport: "Viewport",
        width: float,
        height: float,
    ):
        matrix = viewport.get_matrix()
        x0, y0, w, h = matrix.invert().transform_rect((0, 0, width, height))
        step = self.grid_size
        min_x = max(-GRID_EXTENT, math.floor(x0 / step) * step)
        max_x = min(GRID_EXTENT, x0 + w)
        min_y = max(-GRID_EXTENT, math.floor(y0 / step) * step)
        max_y = min(GRID_EXTENT, y0 + h)

        ctx.save()
        ctx.transform(matrix.to_cairo())
        ctx.set_line_width(1.0)
        _set_color(ctx, GRID)
        x = min_x
        while x <= max_x:
            ctx.move_to(x, -GRID_EXTENT)
            ctx.line_to(x, GRID_EXTENT)
            x += step
        y = min_y
        while y <= max_y:
            ctx.move_to(-GRID_EXTENT, y)
            ctx.line_to(GRID_EXTENT, y)
            y += step
        ctx.stroke()

        _set_color(ctx, AXIS)
        ctx.move_to(-GRID_EXTENT, 0)
        ctx.line_to(GRID_EXTENT, 0)
        ctx.move_to(0, -GRID_EXTENT)
        ctx.line_to(0, GRID_EXTENT)
        ctx.stroke()
        ctx.restore()

    def _render_marquee(self, ctx: cairo.Context, rect):
        ctx.save()
        ctx.rectangle(*rect)
        _set_color(ctx, MARQUEE_FILL)
        ctx.fill_preserve()
        _set_color(ctx, MARQUEE_STROKE)
        ctx.set_line_width(1.0)
        ctx.stroke()
        ctx.restore()


def render_scene_to_raster(
    scene: "Scene",
    viewport: "Viewport",
    width: int,
    height: int,
    renderer: SceneRenderer | None = None,
) -> cairo.ImageSurface:
    """
    Renders the scene into a new ARGB32 image surface.

    The selection is cleared while drawing so that highlights and handles
    never end up in the image, and restored afterwards, even if drawing
    fails.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")
    renderer = renderer or SceneRenderer()
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    ctx = cairo.Context(surface)

    selected = [o for o in scene.objects if o.selected]
    for obj in selected:
        obj.selected = False
    try:
        renderer.render(ctx, scene, viewport, width, height, overlays=False)
    finally:
        for obj in selected:
            obj.selected = True
    surface.flush()
    return surface


def export_png(
    path: Path,
    scene: "Scene",
    viewport: "Viewport",
    width: int,
    height: int,
    renderer: SceneRenderer | None = None,
) -> Path:
    """Renders the scene and writes it to a PNG file. Returns the path."""
    if path.suffix.lower() != ".png":
        path = path.with_name(path.name + ".png")
    surface = render_scene_to_raster(scene, viewport, width, height, renderer)
    surface.write_to_png(str(path))
    logger.info(f"Exported {width}x{height} image to {path}")
    return path
