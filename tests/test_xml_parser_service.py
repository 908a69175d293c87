import pytest

from radioinfo.exceptions import ParseError
from radioinfo.services.xml_parser_service import parse_channels, parse_scheduled_episodes
from tests.conftest import STOCKHOLM, channels_xml, episode_xml, schedule_xml, stockholm


def test_parse_channels_keeps_document_order():
    content = channels_xml(("164", "P3"), ("132", "P1"), ("163", "P2"))

    channels = parse_channels(content)

    assert [(c.id, c.name) for c in channels] == [("164", "P3"), ("132", "P1"), ("163", "P2")]
    assert channels[0].tagline == "Tagline for P3"
    assert channels[0].image_url is None


def test_parse_channels_empty_listing_is_valid():
    assert parse_channels(channels_xml()) == []


def test_parse_channels_missing_id_is_parse_error():
    content = b'<sr><channels><channel name="P1" /></channels></sr>'

    with pytest.raises(ParseError):
        parse_channels(content)


@pytest.mark.parametrize("content", [b"<sr><channels><channel", b"", b"   ", b"not xml at all"])
def test_malformed_documents_are_parse_errors(content):
    with pytest.raises(ParseError):
        parse_channels(content)


def test_parse_episode_converts_to_local_time():
    content = schedule_xml(
        episode_xml(
            "Morgonpasset",
            "2025-01-26T10:00:00Z",
            "2025-01-26T11:30:00Z",
            description="Musik och prat",
            image_url="https://static-cdn.sr.se/images/morgon.jpg",
        )
    )

    [episode] = parse_scheduled_episodes(content, STOCKHOLM)

    assert episode.title == "Morgonpasset"
    assert episode.description == "Musik och prat"
    assert episode.start_time == "01-26 11:00"
    assert episode.end_time == "01-26 12:30"
    assert episode.start_at == stockholm(2025, 1, 26, 11, 0)
    assert episode.image_url == "https://static-cdn.sr.se/images/morgon.jpg"
    assert episode.has_image


def test_parse_episode_summer_offset():
    content = schedule_xml(episode_xml("Sommar", "2025-07-26T10:00:00Z", "2025-07-26T11:00:00Z"))

    [episode] = parse_scheduled_episodes(content, STOCKHOLM)

    assert episode.start_time == "07-26 12:00"
    assert episode.end_time == "07-26 13:00"


def test_missing_image_yields_episode_without_image():
    content = schedule_xml(episode_xml("Ekot", "2025-01-26T10:00:00Z", "2025-01-26T10:15:00Z"))

    [episode] = parse_scheduled_episodes(content, STOCKHOLM)

    assert episode.image_url is None
    assert not episode.has_image


def test_empty_description_is_valid():
    content = schedule_xml(episode_xml("Ekot", "2025-01-26T10:00:00Z", "2025-01-26T10:15:00Z", description=""))

    [episode] = parse_scheduled_episodes(content, STOCKHOLM)

    assert episode.description == ""


@pytest.mark.parametrize("tag", ["title", "starttimeutc", "endtimeutc", "description"])
def test_missing_required_element_is_parse_error(tag):
    fragment = episode_xml("Ekot", "2025-01-26T10:00:00Z", "2025-01-26T10:15:00Z", description="Nyheter")
    start = fragment.index(f"<{tag}>")
    end = fragment.index(f"</{tag}>") + len(f"</{tag}>")
    content = schedule_xml(fragment[:start] + fragment[end:])

    with pytest.raises(ParseError, match=tag):
        parse_scheduled_episodes(content, STOCKHOLM)


def test_unparseable_timestamp_is_parse_error():
    content = schedule_xml(episode_xml("Ekot", "someday", "2025-01-26T10:15:00Z"))

    with pytest.raises(ParseError):
        parse_scheduled_episodes(content, STOCKHOLM)


def test_episodes_keep_upstream_order():
    content = schedule_xml(
        episode_xml("Second", "2025-01-26T12:00:00Z", "2025-01-26T13:00:00Z"),
        episode_xml("First", "2025-01-26T10:00:00Z", "2025-01-26T11:00:00Z"),
    )

    episodes = parse_scheduled_episodes(content, STOCKHOLM)

    assert [e.title for e in episodes] == ["Second", "First"]


def test_schedule_without_episodes_is_empty():
    assert parse_scheduled_episodes(schedule_xml(), STOCKHOLM) == []
