import logging

from radioinfo.services.api_client import SverigesRadioClient
from radioinfo.services.fetch_types import Channel
from radioinfo.services.xml_parser_service import parse_channels


logger = logging.getLogger(__name__)


class ChannelDirectory:
    """Fetches the complete channel listing. Caching is left to the caller."""

    def __init__(self, client: SverigesRadioClient) -> None:
        self.client = client

    async def fetch_all(self) -> list[Channel]:
        """
        Fetch every channel in one unpaginated request

        Raises:
            TransportError: If the API cannot be reached
            ParseError: If the listing is malformed
        """
        content = await self.client.get_xml("channels", {"pagination": "false"})
        channels = parse_channels(content)
        logger.info("Channel directory fetched: %s channels", len(channels))
        return channels
