from typing import Optional
import logging

from lxml import etree # type: ignore

from radioinfo.exceptions import ParseError
from radioinfo.services.fetch_types import Channel, Episode
from radioinfo.utils.timezone import DateFormatError, parse_iso8601_to_utc, to_local

logger = logging.getLogger(__name__)

_REQUIRED_EPISODE_FIELDS = ("title", "starttimeutc", "endtimeutc", "description")

_parser = etree.XMLParser(resolve_entities=False, no_network=True)


def parse_channels(content: bytes) -> list[Channel]:
    """
    Parse a channel listing document

    Args:
        content: Raw XML returned by the channels endpoint

    Returns:
        Channels in document order (empty list if none)

    Raises:
        ParseError: If XML is malformed or a channel lacks id/name
    """
    root = _load_document(content)

    channels = []
    for element in root.iter("channel"):
        channel_id = element.get("id")
        name = element.get("name")
        if not channel_id or name is None:
            raise ParseError(f"Channel element missing id/name attribute (line {element.sourceline})")

        image_url = _get_text(element, "image")
        channels.append(Channel(
            id=channel_id,
            name=name,
            image_url=image_url or None,
            tagline=_get_text(element, "tagline") or None,
            channel_type=_get_text(element, "channeltype") or None,
        ))

    logger.debug("Parsed %s channels", len(channels))
    return channels


def parse_scheduled_episodes(content: bytes, target_tz: str) -> list[Episode]:
    """
    Parse a scheduled episodes document

    Args:
        content: Raw XML returned by the scheduledepisodes endpoint
        target_tz: Timezone the episode times are converted to

    Returns:
        Episodes in upstream order (empty list if none)

    Raises:
        ParseError: If XML is malformed or an episode lacks a required field
    """
    root = _load_document(content)

    episodes = [
        _parse_single_episode(element, target_tz)
        for element in root.iter("scheduledepisode")
    ]

    logger.debug("Parsed %s scheduled episodes", len(episodes))
    return episodes


def _load_document(content: bytes) -> etree._Element:
    """Parse raw bytes into a root element"""
    if not content or not content.strip():
        raise ParseError("Empty response body")
    try:
        return etree.fromstring(content, parser=_parser)
    except etree.XMLSyntaxError as e:
        logger.error("XML parsing error: %s", e)
        raise ParseError(f"Malformed XML: {e}") from e


def _parse_single_episode(element: etree._Element, target_tz: str) -> Episode:
    """Parse single scheduledepisode element"""
    missing = [tag for tag in _REQUIRED_EPISODE_FIELDS if element.find(tag) is None]
    if missing:
        raise ParseError(
            f"Scheduled episode missing required element(s) {', '.join(missing)} "
            f"(line {element.sourceline})"
        )

    start_str = _get_text(element, "starttimeutc", default="")
    end_str = _get_text(element, "endtimeutc", default="")
    try:
        start_at = to_local(parse_iso8601_to_utc(start_str), target_tz)
        end_at = to_local(parse_iso8601_to_utc(end_str), target_tz)
    except DateFormatError as e:
        raise ParseError(str(e)) from e

    # imageurl is optional; an empty element counts as no image
    image_url = _get_text(element, "imageurl")

    return Episode(
        title=_get_text(element, "title", default=""),
        description=_get_text(element, "description", default=""),
        start_at=start_at,
        end_at=end_at,
        image_url=image_url or None,
    )


def _get_text(element: etree._Element, tag: str, default: Optional[str] = None) -> Optional[str]:
    """Safely extract text from XML element"""
    child = element.find(tag)
    if child is None or not child.text:
        return default
    return child.text.strip()
