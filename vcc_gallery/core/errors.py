# vcc_gallery/core/errors.py


class GalleryError(Exception):
    """Base class for errors that abort a gallery request."""


class MediaRootUnavailable(GalleryError):
    """The directory backing a page (media root or a folder) could not be listed."""

    def __init__(self, path, cause: OSError):
        super().__init__(f"cannot read {path}: {cause}")
        self.path = path
        self.cause = cause
