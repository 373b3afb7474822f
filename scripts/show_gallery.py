#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# scripts/show_gallery.py
#
# Print the modal navigation list (index, path, caption) without starting the server.
#
# Usage examples:
#   python scripts/show_gallery.py
#   python scripts/show_gallery.py --root ~/Pictures/trip
#   python scripts/show_gallery.py --folder beach-day
#   MEDIA_ROOT=/srv/photos python scripts/show_gallery.py

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from vcc_gallery.core.config import load_settings
from vcc_gallery.services.gallery import build_entry
from vcc_gallery.services.scanner import scan_directory, walk_media


def _stringify(x) -> str:
    if x is None:
        return ""
    return str(x)


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Render rows as a plain ASCII table (stdlib only)."""
    srows = [[_stringify(v) for v in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in srows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return " | ".join(c.ljust(widths[i]) for i, c in enumerate(cells)).rstrip()

    out = [line(headers), "-+-".join("-" * w for w in widths)]
    out += [line(r) for r in srows]
    return "\n".join(out)


def navigation_rows(root: Path, folder: Optional[str] = None) -> List[tuple]:
    """(index, relative_path, caption) in the same order the gallery pages use."""
    if folder:
        rel_paths = [f"{folder}/{f}" for f in scan_directory(root / folder, root).files]
    else:
        rel_paths = walk_media(root)
    return [(i, rel, build_entry(root, rel).caption) for i, rel in enumerate(rel_paths)]


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="List gallery media with resolved captions")
    ap.add_argument("--root", default=None, help="Media root (default: gallery.toml / MEDIA_ROOT / photos)")
    ap.add_argument("--folder", default=None, help="Only this top-level folder (folder page order)")
    args = ap.parse_args(argv)

    settings = load_settings(media_root=args.root)
    try:
        rows = navigation_rows(settings.media_root, args.folder)
    except OSError as e:
        print(f"Cannot read {settings.media_root}: {e}", file=sys.stderr)
        return 1

    print(f"== {settings.media_root}{'/' + args.folder if args.folder else ''} ==")
    if not rows:
        print("(no media)")
        return 0
    print(format_table(["#", "path", "caption"], rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())
