# vcc_gallery/services/scanner.py
# Directory listing + recursive media walk.
# Enumeration order is name order (code point), so "first file" is stable
# across filesystems.
from __future__ import annotations
from pathlib import Path
from typing import List, NamedTuple, Optional, Set, Tuple
import logging
import os

from vcc_gallery.core.config import SUPPORTED_EXT

log = logging.getLogger(__name__)


class DirectoryListing(NamedTuple):
    dirs: List[str]
    files: List[str]     # supported media only


def media_ext(name: str) -> str:
    return os.path.splitext(name)[1].lower()


def is_media_file(name: str) -> bool:
    return media_ext(name) in SUPPORTED_EXT


def _leaves_root(entry: os.DirEntry, root_real: str) -> bool:
    """True for a symlink whose target lies outside the media root."""
    if not entry.is_symlink():
        return False
    target = os.path.realpath(entry.path)
    return os.path.commonpath([target, root_real]) != root_real


def _entries(path: Path, root: Optional[Path] = None) -> List[Tuple[str, bool]]:
    """
    (name, is_dir) for every child, sorted by name. Raises OSError.
    With root given, symlinks pointing outside it are dropped: they could not be served.
    """
    root_real = os.path.realpath(root) if root is not None else None
    out: List[Tuple[str, bool]] = []
    with os.scandir(path) as it:
        for entry in it:
            if root_real is not None and _leaves_root(entry, root_real):
                log.debug(f"skipping {entry.path}: links outside the media root")
                continue
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            out.append((entry.name, is_dir))
    out.sort(key=lambda e: e[0])
    return out


def scan_directory(path: Path, root: Optional[Path] = None) -> DirectoryListing:
    """Split a directory into subdirectories and supported media files. Raises OSError."""
    dirs: List[str] = []
    files: List[str] = []
    for name, is_dir in _entries(path, root):
        if is_dir:
            dirs.append(name)
        elif is_media_file(name):
            files.append(name)
    return DirectoryListing(dirs, files)


def scan_directory_safe(path: Path, root: Optional[Path] = None) -> DirectoryListing:
    """Like scan_directory, but an unreadable directory is logged and treated as empty."""
    try:
        return scan_directory(path, root)
    except OSError as e:
        log.warning(f"cannot scan {path}: {e}")
        return DirectoryListing([], [])


def walk_media(root: Path, rel: str = "", _seen: Optional[Set[str]] = None) -> List[str]:
    """
    Depth-first list of every media file under root, as posix paths relative to root.
    Entries are visited in enumeration order; a subdirectory is expanded where it
    appears. Directories already visited (symlink loops) and symlinks leading
    outside root are skipped.
    """
    seen = _seen if _seen is not None else set()
    here = root / rel if rel else root
    real = os.path.realpath(here)
    if real in seen:
        log.debug(f"skipping already visited {here}")
        return []
    seen.add(real)

    try:
        entries = _entries(here, root)
    except OSError as e:
        if not rel:
            raise
        log.warning(f"cannot scan {here}: {e}")
        return []

    out: List[str] = []
    for name, is_dir in entries:
        child = f"{rel}/{name}" if rel else name
        if is_dir:
            out.extend(walk_media(root, child, seen))
        elif is_media_file(name):
            out.append(child)
    return out
