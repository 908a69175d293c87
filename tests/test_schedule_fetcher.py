from datetime import date

import pytest

from radioinfo.exceptions import ParseError, TransportError
from radioinfo.services.schedule_fetcher import ScheduleFetcher
from tests.conftest import STOCKHOLM, ScheduleApi, episode_xml, make_client, schedule_xml


async def test_fetch_for_date_builds_query():
    api = ScheduleApi({
        "2025-01-26": schedule_xml(episode_xml("Ekot", "2025-01-26T10:00:00Z", "2025-01-26T10:15:00Z")),
    })
    fetcher = ScheduleFetcher(make_client(api), STOCKHOLM)

    episodes = await fetcher.fetch_for_date("132", date(2025, 1, 26))

    assert [(e.title, e.start_time, e.end_time) for e in episodes] == [("Ekot", "01-26 11:00", "01-26 11:15")]
    [request] = api.requests
    assert request.url.path.endswith("/scheduledepisodes")
    assert dict(request.url.params) == {"channelid": "132", "date": "2025-01-26", "pagination": "false"}


async def test_fetch_for_date_without_episodes_is_empty():
    fetcher = ScheduleFetcher(make_client(ScheduleApi()), STOCKHOLM)

    assert await fetcher.fetch_for_date("132", date(2025, 1, 26)) == []


async def test_fetch_for_date_transport_error():
    api = ScheduleApi()
    api.failures.add("2025-01-26")
    fetcher = ScheduleFetcher(make_client(api), STOCKHOLM)

    with pytest.raises(TransportError):
        await fetcher.fetch_for_date("132", date(2025, 1, 26))


async def test_fetch_for_date_parse_error():
    api = ScheduleApi({"2025-01-26": b"<sr><schedule><scheduledepisode><title>x</title></scheduledepisode>"})
    fetcher = ScheduleFetcher(make_client(api), STOCKHOLM)

    with pytest.raises(ParseError):
        await fetcher.fetch_for_date("132", date(2025, 1, 26))
