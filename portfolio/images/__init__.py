"""
Image resolution.

Extension-probing resolution of candidate image paths, with probers for a
local images tree, an HTTP origin, or a fixed manifest.
"""

from .resolver import (
    EXTENSIONS,
    THUMBNAIL_EXTENSIONS,
    PENDING,
    LOADED,
    FAILED,
    CANCELLED,
    strip_extension,
    iter_probe_paths,
    FileSystemProber,
    HttpProber,
    StaticProber,
    ImageTarget,
    ResolutionChain,
    ImageResolver,
)

__all__ = [
    "EXTENSIONS",
    "THUMBNAIL_EXTENSIONS",
    "PENDING",
    "LOADED",
    "FAILED",
    "CANCELLED",
    "strip_extension",
    "iter_probe_paths",
    "FileSystemProber",
    "HttpProber",
    "StaticProber",
    "ImageTarget",
    "ResolutionChain",
    "ImageResolver",
]
