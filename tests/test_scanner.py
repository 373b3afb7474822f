import os
from pathlib import Path

import pytest

from vcc_gallery.services import scanner
from vcc_gallery.services.scanner import (
    is_media_file, scan_directory, scan_directory_safe, walk_media,
)

from conftest import make_file, make_image


def test_extension_filter_is_case_insensitive():
    for name in ["A.JPG", "b.jpeg", "c.Png", "d.gif", "e.MP4", "f.mov", "g.webm", "h.WebP"]:
        assert is_media_file(name), name
    for name in ["notes-from-trip.txt", "raw.cr2", "photo.heic", "jpg", "archive.jpg.zip"]:
        assert not is_media_file(name), name


def test_scan_directory_splits_and_filters(media_root):
    listing = scan_directory(media_root)
    assert listing.dirs == ["beach-day", "empty", "zoo"]
    assert listing.files == ["a.jpg", "beach_sunset.mp4"]


def test_scan_directory_raises_for_missing(tmp_path):
    with pytest.raises(OSError):
        scan_directory(tmp_path / "nope")


def test_scan_directory_safe_returns_empty(tmp_path, caplog):
    listing = scan_directory_safe(tmp_path / "nope")
    assert listing.dirs == [] and listing.files == []
    assert "cannot scan" in caplog.text


def test_walk_media_depth_first(media_root):
    assert walk_media(media_root) == [
        "a.jpg",
        "beach-day/b1.jpg",
        "beach-day/b2.png",
        "beach-day/sub/deep.png",
        "beach_sunset.mp4",
        "zoo/aaa.jpg",
        "zoo/bbb.png",
        "zoo/ccc.gif",
        "zoo/cover.png",
    ]


def test_walk_media_missing_root_raises(tmp_path):
    with pytest.raises(OSError):
        walk_media(tmp_path / "nope")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
def test_walk_media_survives_symlink_loop(tmp_path):
    make_file(tmp_path / "album" / "clip.mov")
    try:
        os.symlink(tmp_path, tmp_path / "album" / "loop", target_is_directory=True)
    except OSError:
        pytest.skip("symlinks not permitted")
    assert walk_media(tmp_path) == ["album/clip.mov"]


def test_walk_media_skips_unreadable_subtree(tmp_path, monkeypatch, caplog):
    make_image(tmp_path / "a.png")
    make_image(tmp_path / "bad" / "b.png")
    make_image(tmp_path / "ok" / "c.png")
    real_entries = scanner._entries

    def entries(path, root=None):
        if Path(path).name == "bad":
            raise PermissionError(13, "Permission denied", str(path))
        return real_entries(path, root)

    monkeypatch.setattr(scanner, "_entries", entries)
    assert walk_media(tmp_path) == ["a.png", "ok/c.png"]
    assert "cannot scan" in caplog.text


def _symlink_or_skip(target, link, is_dir):
    try:
        os.symlink(target, link, target_is_directory=is_dir)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not permitted")


def test_symlinks_leaving_root_are_skipped(tmp_path):
    root = tmp_path / "photos"
    make_image(root / "inside" / "x.png")
    make_image(tmp_path / "outside" / "y.png")
    _symlink_or_skip(tmp_path / "outside", root / "escape", True)
    _symlink_or_skip(tmp_path / "outside" / "y.png", root / "y-link.png", False)
    _symlink_or_skip(root / "inside", root / "alias", True)

    listing = scan_directory(root, root)
    assert listing.dirs == ["alias", "inside"]
    assert listing.files == []
    assert walk_media(root) == ["alias/x.png"]
    # without a root every entry is listed
    assert "escape" in scan_directory(root).dirs
