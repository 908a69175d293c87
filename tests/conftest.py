from datetime import datetime
from typing import Callable
from xml.sax.saxutils import escape
from zoneinfo import ZoneInfo

import httpx
import pytest

from radioinfo.services.api_client import SverigesRadioClient

API_BASE = "http://api.test/api/v2"
STOCKHOLM = "Europe/Stockholm"


def stockholm(*args: int) -> datetime:
    """Aware datetime in Stockholm local time"""
    return datetime(*args, tzinfo=ZoneInfo(STOCKHOLM))


def channels_xml(*channels: tuple[str, str]) -> bytes:
    body = "".join(
        f'<channel id="{escape(channel_id)}" name="{escape(name)}">'
        f"<tagline>Tagline for {escape(name)}</tagline></channel>"
        for channel_id, name in channels
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f"<sr><copyright>Copyright Sveriges Radio</copyright><channels>{body}</channels></sr>"
    ).encode("utf-8")


def episode_xml(
    title: str,
    start: str,
    end: str,
    description: str = "",
    image_url: str | None = None,
) -> str:
    image = f"<imageurl>{escape(image_url)}</imageurl>" if image_url is not None else ""
    return (
        "<scheduledepisode>"
        f"<episodeid>1</episodeid><title>{escape(title)}</title>"
        f"<description>{escape(description)}</description>"
        f"<starttimeutc>{start}</starttimeutc><endtimeutc>{end}</endtimeutc>"
        '<program id="1" name="Program" /><channel id="132" name="P1" />'
        f"{image}"
        "</scheduledepisode>"
    )


def schedule_xml(*episodes: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f"<sr><schedule>{''.join(episodes)}</schedule></sr>"
    ).encode("utf-8")


def make_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> SverigesRadioClient:
    """SverigesRadioClient backed by an in-memory transport"""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SverigesRadioClient(API_BASE, http_client=http_client, **kwargs)


class ScheduleApi:
    """
    Fake upstream: serves channels and per-date schedules, records requests.

    Dates listed in `failures` answer with a connection error.
    """

    def __init__(self, schedules: dict[str, bytes] | None = None, channels: bytes | None = None):
        self.schedules = schedules or {}
        self.channels = channels if channels is not None else channels_xml()
        self.failures: set[str] = set()
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/channels"):
            return httpx.Response(200, content=self.channels)

        day = request.url.params["date"]
        if day in self.failures:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, content=self.schedules.get(day, schedule_xml()))

    @property
    def requested_dates(self) -> list[str]:
        return [r.url.params["date"] for r in self.requests if "date" in r.url.params]


@pytest.fixture
def schedule_api() -> ScheduleApi:
    return ScheduleApi()
