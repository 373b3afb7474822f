# vcc_gallery/services/gallery.py
# Builds the page model for "/" and "/{folder}".
# - root page: folder tiles + root-level file tiles; the navigation list covers
#   every media file under the root (depth-first) so the modal can page through all of it
# - folder page: the folder's immediate files; navigation scoped to that folder
# Blocking filesystem / Pillow work runs in the threadpool; siblings are gathered.
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Sequence
import asyncio
import logging
import unicodedata

from fastapi.concurrency import run_in_threadpool

from vcc_gallery.core.config import Settings, VIDEO_EXT
from vcc_gallery.core.errors import MediaRootUnavailable
from vcc_gallery.schemas.media import FileItem, FolderItem, GalleryItem, GalleryPage, MediaEntry
from vcc_gallery.services.captions import resolve_caption
from vcc_gallery.services.covers import select_cover
from vcc_gallery.services.scanner import media_ext, scan_directory, walk_media
from vcc_gallery.utils.http import media_url, thumb_url

log = logging.getLogger(__name__)


def collation_key(s: str):
    """
    Approximates a locale compare: letters first ignoring accents and case,
    then unaccented before accented, then lowercase before uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", s)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (
        base.casefold(),
        len(decomposed) - len(base),
        tuple(c.isupper() for c in base),
        s,
    )


def sort_key(item: GalleryItem):
    """Folders first; then by folder name / file caption."""
    if isinstance(item, FolderItem):
        return (0, collation_key(item.name))
    return (1, collation_key(item.caption))


def sort_items(items: Sequence[GalleryItem]) -> List[GalleryItem]:
    return sorted(items, key=sort_key)


def build_entry(root: Path, rel_path: str) -> MediaEntry:
    """Read one file's caption (blocking)."""
    ext = media_ext(rel_path)
    return MediaEntry(
        relative_path=rel_path,
        caption=resolve_caption(root / rel_path, ext),
        ext=ext,
        url=media_url(rel_path),
        is_video=ext in VIDEO_EXT,
    )


def to_file_item(entry: MediaEntry, index: int, thumb_height: int) -> FileItem:
    return FileItem(
        **entry.model_dump(),
        thumbnail_url=thumb_url(entry.relative_path, entry.ext, thumb_height),
        index=index,
    )


async def _build_entries(root: Path, rel_paths: Sequence[str]) -> List[MediaEntry]:
    return list(await asyncio.gather(
        *(run_in_threadpool(build_entry, root, rel) for rel in rel_paths)
    ))


async def build_root_gallery(settings: Settings) -> GalleryPage:
    root = settings.media_root
    try:
        listing = await run_in_threadpool(scan_directory, root, root)
        all_paths = await run_in_threadpool(walk_media, root)
    except OSError as e:
        raise MediaRootUnavailable(root, e) from e

    folders, all_media = await asyncio.gather(
        asyncio.gather(*(
            run_in_threadpool(select_cover, root / d, d, settings.thumb_height, root)
            for d in listing.dirs
        )),
        _build_entries(root, all_paths),
    )

    position: Dict[str, int] = {m.relative_path: i for i, m in enumerate(all_media)}
    files: List[FileItem] = []
    for name in listing.files:
        idx = position.get(name)
        if idx is None:
            # created between the listing and the walk
            log.debug(f"{name} missing from the navigation list")
            entry = await run_in_threadpool(build_entry, root, name)
            all_media.append(entry)
            idx = len(all_media) - 1
        files.append(to_file_item(all_media[idx], idx, settings.thumb_height))

    log.debug(f"root gallery: {len(folders)} folders, {len(files)} files, {len(all_media)} in navigation")
    return GalleryPage(view="root", items=sort_items([*folders, *files]), media=all_media)


async def build_folder_gallery(settings: Settings, name: str) -> GalleryPage:
    folder = settings.media_root / name
    try:
        listing = await run_in_threadpool(scan_directory, folder, settings.media_root)
    except OSError as e:
        raise MediaRootUnavailable(folder, e) from e

    media = await _build_entries(settings.media_root, [f"{name}/{f}" for f in listing.files])
    files = [to_file_item(m, i, settings.thumb_height) for i, m in enumerate(media)]
    return GalleryPage(view="folder", folder=name, items=sort_items(files), media=media)
