# vcc_gallery: local photo/video folder served as a web gallery.
__version__ = "0.1.0"
