# vcc_gallery/schemas/media.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Literal, Union


class MediaEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    relative_path: str          # posix path under the media root
    caption: str
    ext: str                    # lowercased, with leading dot
    url: str                    # URL path of the raw file
    is_video: bool = False


class FileItem(MediaEntry):
    kind: Literal["file"] = "file"
    thumbnail_url: str
    index: int                  # position in the page's navigation list


class FolderItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["folder"] = "folder"
    name: str
    caption: str
    thumbnail_url: str
    link_path: str
    cover_is_video: bool = False


GalleryItem = Union[FolderItem, FileItem]


class GalleryPage(BaseModel):
    view: Literal["root", "folder"]
    folder: Optional[str] = None
    items: List[GalleryItem]
    media: List[MediaEntry]     # modal navigation list
