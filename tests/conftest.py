from pathlib import Path
import struct
from typing import Optional

import pytest
from PIL import Image
from fastapi.testclient import TestClient

from vcc_gallery.core.config import Settings
from vcc_gallery.main import create_app


def make_image(path: Path, fmt: Optional[str] = None, *, description: Optional[str] = None,
               model: Optional[str] = None, taken: Optional[str] = None,
               title: Optional[str] = None) -> Path:
    """Write a tiny image; JPEGs can carry ImageDescription / Model / DateTimeOriginal / XPTitle."""
    path.parent.mkdir(parents=True, exist_ok=True)
    im = Image.new("RGB", (40, 30), "red")
    exif = Image.Exif()
    if description:
        exif[0x010E] = description   # ImageDescription
    if model:
        exif[0x0110] = model         # Model
    if title:
        exif[0x9C9B] = title.encode("utf-16-le")   # XPTitle
    if taken:
        exif[0x9003] = taken         # DateTimeOriginal
    if len(exif):
        im.save(path, format=fmt or "JPEG", exif=exif.tobytes())
    else:
        im.save(path, format=fmt)
    return path


def add_iptc_object_name(path: Path, object_name: str) -> Path:
    """Insert a Photoshop APP13 segment carrying IPTC 2:05 right after the JPEG SOI marker."""
    value = object_name.encode("utf-8")
    iptc = b"\x1c\x02\x05" + struct.pack(">H", len(value)) + value
    resource = b"8BIM" + struct.pack(">H", 0x0404) + b"\x00\x00" + struct.pack(">I", len(iptc)) + iptc
    if len(iptc) % 2:
        resource += b"\x00"
    payload = b"Photoshop 3.0\x00" + resource
    segment = b"\xff\xed" + struct.pack(">H", len(payload) + 2) + payload
    data = path.read_bytes()
    path.write_bytes(data[:2] + segment + data[2:])
    return path


def make_file(path: Path, data: bytes = b"\x00\x00\x00\x18ftypmp42") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """
    photos/
      a.jpg
      beach_sunset.mp4
      notes-from-trip.txt
      beach-day/b1.jpg (ImageDescription "Sunny"), b2.png, sub/deep.png
      empty/
      zoo/aaa.jpg, bbb.png, ccc.gif, cover.png
    """
    root = tmp_path / "photos"
    make_image(root / "a.jpg")
    make_file(root / "beach_sunset.mp4")
    make_file(root / "notes-from-trip.txt", b"not media")
    make_image(root / "beach-day" / "b1.jpg", description="Sunny")
    make_image(root / "beach-day" / "b2.png")
    make_image(root / "beach-day" / "sub" / "deep.png")
    (root / "empty").mkdir()
    make_image(root / "zoo" / "aaa.jpg")
    make_image(root / "zoo" / "bbb.png")
    make_image(root / "zoo" / "ccc.gif")
    make_image(root / "zoo" / "cover.png")
    return root


@pytest.fixture
def settings(media_root: Path) -> Settings:
    return Settings(title="Test Gallery", author="Tester", media_root=media_root)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))
