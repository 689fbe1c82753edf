"""Playlist parsers producing playable stream descriptors."""

import logging
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, Union

from .utils import camelize, local_name, parse_int, to_number


logger = logging.getLogger(__name__)

_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)
_LINE_BREAKS = re.compile(r"[\r\n]+")


class PlaylistParseError(ValueError):
    """Base error for playlist content that yields no usable streams."""


class XMLError(PlaylistParseError):
    """Raised when the playlist is not well-formed XML."""


class NoStreamsError(PlaylistParseError):
    """Raised when a playlist parses but contains no valid stream."""


@dataclass(frozen=True)
class StreamDescriptor:
    """A playable stream extracted from a playlist."""
    stream_url: str
    title: str = ""
    description: str = ""
    duration: float = -1  # seconds, -1 when unknown
    bitrate: Optional[Union[int, float]] = None
    mime_type: Optional[str] = None
    metas: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the stream as a plain dict with camelCase keys."""
        data = asdict(self)
        return {
            "streamUrl": data["stream_url"],
            "title": data["title"],
            "description": data["description"],
            "duration": data["duration"],
            "bitrate": data["bitrate"],
            "mimeType": data["mime_type"],
            "metas": data["metas"],
        }


class PlaylistParser(ABC):
    """Common interface of the playlist format parsers.

    Parsers keep no state between calls, so a single instance can be
    shared and used from several tasks at once.
    """

    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def parse(self, content: Union[str, bytes]) -> List[StreamDescriptor]:
        """Extract the streams from playlist content.

        Args:
            content: Raw playlist text, or undecoded bytes

        Returns:
            List of StreamDescriptor objects, never empty

        Raises:
            PlaylistParseError: If no stream can be extracted
        """

    async def parse_async(self, content: Union[str, bytes]) -> List[StreamDescriptor]:
        """Coroutine version of :meth:`parse` for asynchronous callers."""
        return self.parse(content)

    def parse_file(self, file_path: Union[str, Path]) -> List[StreamDescriptor]:
        """Read a playlist file and extract its streams.

        Args:
            file_path: Path to the playlist file

        Returns:
            List of StreamDescriptor objects

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file extension isn't handled by this parser
            PlaylistParseError: If no stream can be extracted
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if path.suffix.lower() not in self.extensions:
            expected = ", ".join(self.extensions)
            raise ValueError(f"File must be one of {expected}, got: {path.suffix}")

        return self.parse(path.read_bytes())


def extract_metas(content: str) -> Dict[str, str]:
    """Extract metadata from an Icecast formatted annotation.

    Each line of the form ``key: value`` becomes an entry keyed by the
    camel-cased key. Lines without a colon are skipped and a repeated
    key keeps its last value.

    Args:
        content: Text of an ``<annotation>`` tag

    Returns:
        Dict mapping camel-cased keys to trimmed values
    """
    metas: Dict[str, str] = {}

    for line in _LINE_BREAKS.split(content):
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        metas[camelize(key.strip())] = value.strip()

    return metas


def _text(elem: ET.Element) -> str:
    """Concatenated text of an element and its descendants."""
    return "".join(elem.itertext())


def _children(elem: ET.Element) -> Iterator[Tuple[str, ET.Element]]:
    """Yield (local tag name, element) for the direct element children."""
    for child in elem:
        # comments and processing instructions carry a callable tag
        if not isinstance(child.tag, str):
            continue
        yield local_name(child.tag), child


def _descendants(elem: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield the elements named ``name`` below ``elem``, in document order."""
    for node in elem.iter():
        if node is not elem and isinstance(node.tag, str) and local_name(node.tag) == name:
            yield node


class XSPFParser(PlaylistParser):
    """Parser for XSPF playlists."""

    extensions = (".xspf",)

    def parse(self, content: Union[str, bytes]) -> List[StreamDescriptor]:
        """Extract the streams from an XSPF document.

        Bytes are decoded by the XML parser following the document's
        encoding declaration, UTF-8 when there is none.

        Args:
            content: XSPF document text or bytes

        Returns:
            List of StreamDescriptor objects in document order

        Raises:
            XMLError: If the document isn't well-formed XML
            NoStreamsError: If no track has a valid http(s) location
        """
        try:
            root = ET.fromstring(content)
        except (ET.ParseError, UnicodeError) as e:
            raise XMLError("XML error") from e

        streams = self._parse_playlists(root)
        if not streams:
            raise NoStreamsError("No streams found")

        return streams

    def _parse_playlists(self, root: ET.Element) -> List[StreamDescriptor]:
        """Extract streams from every <playlist> element."""
        playlists = [root] if local_name(root.tag) == "playlist" else []
        playlists.extend(_descendants(root, "playlist"))

        streams: List[StreamDescriptor] = []
        for playlist in playlists:
            track_list = None
            default_title = ""

            for name, child in _children(playlist):
                if name == "title":
                    default_title = _text(child)
                elif name == "trackList":
                    track_list = child

            if track_list is not None:
                streams.extend(self._parse_track_list(track_list, default_title))

        logger.debug("Parsed streams: %s", streams)
        return streams

    def _parse_track_list(self, track_list: ET.Element, default_title: str) -> List[StreamDescriptor]:
        """Extract streams from the <track> elements of a <trackList>."""
        streams = []
        for track in _descendants(track_list, "track"):
            stream = self._parse_track(track, default_title)
            if stream is not None:
                streams.append(stream)
        return streams

    def _parse_track(self, track: ET.Element, default_title: str) -> Optional[StreamDescriptor]:
        """Build the stream of a single <track>, None if it has no usable URL."""
        url = ""
        title = default_title
        metas: Dict[str, str] = {}
        description = ""
        duration: float = -1

        for name, child in _children(track):
            if name == "title":
                title = _text(child)
            elif name == "location":
                value = _text(child).strip().lower()
                if not _HTTP_URL.match(value):
                    logger.warning("Ignoring non http-stream : %s", value)
                    continue
                url = value
            elif name == "annotation":
                metas = extract_metas(_text(child).strip())
            elif name == "info":
                description = _text(child)
            elif name == "duration":
                duration = self._parse_duration(_text(child))

        if not url:
            logger.debug("Skipping streamless track : %s", track)
            return None

        bitrate = to_number(metas["bitrate"]) if "bitrate" in metas else None
        mime_type = metas.get("contentType")
        if description and metas.get("streamDescription"):
            description = metas["streamDescription"]

        return StreamDescriptor(
            stream_url=url,
            title=title,
            description=description,
            duration=duration,
            bitrate=bitrate,
            mime_type=mime_type,
            metas=metas,
        )

    @staticmethod
    def _parse_duration(text: str) -> float:
        """Convert a duration in milliseconds to seconds, -1 when unknown."""
        value = parse_int(text)
        if value is None or value < 0:
            return -1
        return value / 1000


PARSERS: Dict[str, Type[PlaylistParser]] = {
    extension: parser_class
    for parser_class in (XSPFParser,)
    for extension in parser_class.extensions
}


def get_parser(file_path: Union[str, Path]) -> PlaylistParser:
    """Return a parser for a playlist file based on its extension.

    Raises:
        ValueError: If no parser handles the file extension
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return PARSERS[suffix]()
    except KeyError:
        raise ValueError(f"Unsupported playlist format: {suffix or file_path}") from None
