import argparse
import asyncio
import logging
from pathlib import Path

from .core import LayeredMap
from .editing import Zone, apply_zone, classify_zone
from .errors import TRMapError
from .logging_config import configure_logging
from .persistence import FileStore, PersistenceAdapter, export_text, import_text
from .render import render_lines
from .settings import Settings

logger = logging.getLogger(__name__)

LAYERS = ("floor", "wall_h", "wall_v")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="trmap",
        description="Edit a layered tile map (floor plus shared wall segments) stored on disk.",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("new", help="Create a fresh map and store it, replacing any stored map.")
    sub.add_parser("show", help="Print the stored map.")

    toggle = sub.add_parser("toggle", help="Toggle a wall or floor cell of one tile.")
    toggle.add_argument("x", type=int)
    toggle.add_argument("y", type=int)
    toggle.add_argument("zone", choices=[z.value for z in Zone])

    click = sub.add_parser(
        "click", help="Toggle whatever a click at a pixel offset inside tile X,Y lands on."
    )
    click.add_argument("x", type=int)
    click.add_argument("y", type=int)
    click.add_argument("offset_x", type=float, help="Pixels from the tile's left edge.")
    click.add_argument("offset_y", type=float, help="Pixels from the tile's top edge.")

    fill = sub.add_parser("fill", help="Overwrite every cell of one layer.")
    fill.add_argument("layer", choices=LAYERS)
    fill.add_argument("value", type=int)

    rotate = sub.add_parser("rotate", help="Print the stored map rotated; the stored map is unchanged.")
    rotate.add_argument("--ccw", action="store_true", help="Rotate counter-clockwise.")
    rotate.add_argument("--times", type=int, default=1, help="Number of quarter turns.")

    sub.add_parser("export", help="Print the stored map as base64 text.")
    imp = sub.add_parser("import", help="Replace the stored map with base64 text from `export`.")
    imp.add_argument("text")
    return parser.parse_args(argv)


def _new_map(settings: Settings) -> LayeredMap:
    cfg = settings.map
    return LayeredMap(cfg.width, cfg.height, floor_value=cfg.floor_value, wall_value=cfg.wall_value)


def _print_map(layered_map: LayeredMap) -> None:
    print("\n".join(render_lines(layered_map)))


async def _run(args, settings: Settings) -> int:
    layered_map = _new_map(settings)
    store = FileStore(settings.storage.path)
    adapter = PersistenceAdapter(layered_map, store, key=settings.storage.key)

    if args.command == "new":
        if not await adapter.save():
            return 1
        _print_map(layered_map)
        return 0

    if args.command == "import":
        import_text(layered_map, args.text)
        if not await adapter.save():
            return 1
        _print_map(layered_map)
        return 0

    if not await adapter.load():
        print("No stored map could be loaded; run `trmap new` first.")
        return 1

    if args.command == "show":
        _print_map(layered_map)
    elif args.command == "export":
        print(export_text(layered_map))
    elif args.command == "rotate":
        layered_map.rotate(clockwise=not args.ccw, times=args.times)
        print(f"heading: {layered_map.heading.name}")
        _print_map(layered_map)
    else:
        if args.command == "toggle":
            apply_zone(layered_map, args.x, args.y, Zone(args.zone))
        elif args.command == "click":
            editor = settings.editor
            zone = classify_zone(args.offset_x, args.offset_y, editor.tile_size, editor.edge_band)
            logger.debug("Click in tile (%d, %d) at (%s, %s) hit %s", args.x, args.y, args.offset_x, args.offset_y, zone.value)
            apply_zone(layered_map, args.x, args.y, zone)
        elif args.command == "fill":
            getattr(layered_map, args.layer).fill(args.value)
        if not await adapter.save():
            return 1
        _print_map(layered_map)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.INFO)
    settings = Settings.load(user_path=args.settings_path)
    try:
        return asyncio.run(_run(args, settings))
    except TRMapError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}")
        return 1
