"""Headless command line tools for MindPad maps.

Usage:
  mindpad-cli export map.json --format png --out map.png
  mindpad-cli verify map.json
  mindpad-cli list

Exit status is 0 on success, 2 when a map cannot be read or parsed and 1
when an output file cannot be written.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mindpad.errors import ParseError, ReadError, WriteError
from mindpad.layout import RadialLayout
from mindpad.session import MindMapSession
from mindpad.settings import load_settings
from mindpad.storage import get_maps_dir, list_saved_maps
from mindpad.tree import iter_nodes

FORMATS = ("png", "pdf", "md", "html")


def _load(path: str, width: float, height: float) -> MindMapSession | None:
    session = MindMapSession(load_settings(), width=width, height=height)
    try:
        session.load_file(path)
    except (ReadError, ParseError) as exc:
        sys.stderr.write(f"{exc}\n")
        return None
    return session


def _cmd_export(args: argparse.Namespace) -> int:
    session = _load(args.map, args.width, args.height)
    if session is None:
        return 2

    out = Path(args.out) if args.out else Path(args.map).with_suffix(f".{args.format}")
    try:
        written = session.export(args.format, out)
    except WriteError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    print(f"Wrote {args.format.upper()}: {Path(written).expanduser().resolve()}")
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    session = _load(args.map, args.width, args.height)
    if session is None:
        return 2

    tree = session.tree
    levels, max_depth = RadialLayout.count_levels(tree)
    notes = sum(1 for n in iter_nodes(tree) if n.note.strip())

    print(f"Map: {args.map}")
    print(f"  Root: {tree.label}")
    print(f"  Nodes: {tree.subtree_weight} (max depth {max_depth})")
    print(f"  Per level: {', '.join(f'{d}={levels[d]}' for d in sorted(levels))}")
    print(f"  Nodes with notes: {notes}")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    names = list_saved_maps()
    if not names:
        print(f"No saved maps in {get_maps_dir()}")
        return 0
    for name in names:
        print(name)
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(prog="mindpad-cli")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_exp = sub.add_parser("export", help="Lay out a map and export it")
    p_exp.add_argument("map", help="Map .json file")
    p_exp.add_argument("--format", choices=FORMATS, default="png", help="Output format")
    p_exp.add_argument("--out", help="Output path (default: next to the map)")
    p_exp.add_argument("--width", type=float, default=1200.0, help="Canvas width used for layout")
    p_exp.add_argument("--height", type=float, default=800.0, help="Canvas height used for layout")
    p_exp.set_defaults(func=_cmd_export)

    p_ver = sub.add_parser("verify", help="Check that a map loads and summarize it")
    p_ver.add_argument("map", help="Map .json file")
    p_ver.set_defaults(func=_cmd_verify, width=0.0, height=0.0)

    p_list = sub.add_parser("list", help="List maps in the maps directory")
    p_list.set_defaults(func=_cmd_list)

    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
