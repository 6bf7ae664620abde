# flake8: noqa: E402
import logging
import argparse
import gettext
from pathlib import Path
from typing import List, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# --------------------------------------------------------
# Gettext MUST be initialized before importing app modules
# --------------------------------------------------------
base_dir = Path(__file__).parent.parent

# Make "_" available in all modules
locale_dir = base_dir / 'vectorgraph' / 'locale'
gettext.install("vectorgraph", locale_dir)

from . import config
from .doceditor.editor import SceneEditor


def _describe(obj) -> str:
    x, y, w, h = obj.bounds()
    return (
        f"{obj.type_name:<10} {obj.name!r:<20} "
        f"x={x:.1f} y={y:.1f} w={w:.1f} h={h:.1f}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=_("Inspects and renders VectorGraph drawings.")
    )
    parser.add_argument(
        "filename",
        help=_("Path to a .graph drawing."),
    )
    parser.add_argument(
        "--export",
        metavar="FILENAME",
        help=_("Renders the drawing to a PNG image."),
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help=_("Width of the exported image in pixels (default: 800)"),
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help=_("Height of the exported image in pixels (default: 600)"),
    )
    parser.add_argument(
        "--center",
        action="store_true",
        help=_("Places the world origin at the center of the image."),
    )
    parser.add_argument(
        '--loglevel',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help=_('Set the logging level (default: INFO)')
    )

    args = parser.parse_args(argv)

    # Set logging level based on the command-line argument
    log_level = getattr(logging, args.loglevel.upper(), logging.INFO)
    logging.getLogger().setLevel(log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Application starting with log level {args.loglevel.upper()}")

    config.initialize_managers()
    editor = SceneEditor(config.config)
    editor.notification_requested.connect(
        lambda sender, message="": logger.info(message), weak=False
    )

    if not editor.file.load(Path(args.filename)):
        return 1

    for obj in editor.get_layers():
        print(_describe(obj))

    if args.export:
        if args.center:
            editor.viewport.center_on(args.width, args.height)
        else:
            editor.viewport.set_size(args.width, args.height)
        written = editor.file.export_png(
            Path(args.export), args.width, args.height
        )
        if written is None:
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
