"""Extract playable streams from XSPF playlists."""

from .parser import (
    NoStreamsError,
    PlaylistParseError,
    PlaylistParser,
    StreamDescriptor,
    XMLError,
    XSPFParser,
    extract_metas,
    get_parser,
)

__version__ = "0.1.0"

__all__ = [
    "NoStreamsError",
    "PlaylistParseError",
    "PlaylistParser",
    "StreamDescriptor",
    "XMLError",
    "XSPFParser",
    "extract_metas",
    "get_parser",
]
