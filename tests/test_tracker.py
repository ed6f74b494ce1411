import asyncio

import pytest

from anistream.core.exceptions import NetworkError
from anistream.plugins.anilibria.tracker import AnilibriaTracker, MediaResult, MediaTitle, matches
from anistream.plugins.common import HttpClient


def media(english=None, romaji=None, type=None, year=None):
    return MediaResult(title=MediaTitle(english=english, romaji=romaji), type=type, release_date=year)


@pytest.mark.parametrize("candidate, expected", [
    (media(english="Jujutsu Kaisen"), True),
    (media(english="JUJUTSU KAISEN"), True),
    (media(romaji="jujutsu kaisen"), True),
    (media(type="TV", year=2020), True),
    (media(type="TV", year=2019), False),
    (media(type="MOVIE", year=2020), False),
    (media(english="Jujutsu Kaisen 0", romaji="Gekijouban Jujutsu Kaisen 0"), False),
    (MediaResult(), False),
])
def test_matches(candidate, expected):
    assert matches(candidate, "Jujutsu Kaisen", "tv", 2020) is expected


def test_missing_type_and_year_match_each_other():
    assert matches(media(english="Other"), "Jujutsu Kaisen", None, None)


def test_aliases_are_read_from_api_payload():
    result = MediaResult.model_validate({"id": 5114, "malId": 5114, "releaseDate": 2009})
    assert result.ani_id == "5114"
    assert result.mal_id == 5114
    assert result.release_date == 2009


def test_lookup_returns_first_match(monkeypatch, tracker_payload):
    tracker = AnilibriaTracker(HttpClient("https://anilibria.tv"), "https://tracker.example/meta/")
    requested = []

    async def fake_get_json(url, **kwargs):
        requested.append(url)
        return tracker_payload

    monkeypatch.setattr(tracker.http, "get_json", fake_get_json)

    found = asyncio.run(tracker.lookup("Jujutsu Kaisen", "tv", 2020))

    assert requested == ["https://tracker.example/meta/Jujutsu%20Kaisen"]
    assert found.mal_id == 40748
    assert found.anilist_id == "113415"
    assert found.image == "https://img.example/jjk.jpg"
    assert found.cover == "https://img.example/jjk-cover.jpg"


def test_lookup_without_match_is_empty(monkeypatch, tracker_payload):
    tracker = AnilibriaTracker(HttpClient("https://anilibria.tv"))

    async def fake_get_json(url, **kwargs):
        return tracker_payload

    monkeypatch.setattr(tracker.http, "get_json", fake_get_json)

    found = asyncio.run(tracker.lookup("Naruto", "movie", 2002))
    assert found.model_dump() == {"mal_id": None, "anilist_id": None, "image": None, "cover": None}


def test_lookup_failure_is_empty(monkeypatch):
    tracker = AnilibriaTracker(HttpClient("https://anilibria.tv"))

    async def fake_get_json(url, **kwargs):
        raise NetworkError("Request failed", url=url)

    monkeypatch.setattr(tracker.http, "get_json", fake_get_json)

    found = asyncio.run(tracker.lookup("Jujutsu Kaisen", "tv", 2020))
    assert found.mal_id is None and found.image is None


def test_lookup_without_title_makes_no_request(monkeypatch):
    tracker = AnilibriaTracker(HttpClient("https://anilibria.tv"))

    async def fake_get_json(url, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(tracker.http, "get_json", fake_get_json)

    assert asyncio.run(tracker.lookup("", "tv", 2020)).mal_id is None


class UndecodableResponse:
    status = 200

    async def text(self):
        return b'{"results": ["\xff\xfe"]}'.decode("utf-8")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class UndecodableSession:
    closed = False

    def request(self, method, url, **kwargs):
        return UndecodableResponse()

    async def close(self):
        self.closed = True


def test_lookup_with_undecodable_body_is_empty():
    http = HttpClient("https://anilibria.tv")
    http._session = UndecodableSession()
    tracker = AnilibriaTracker(http)

    found = asyncio.run(tracker.lookup("Jujutsu Kaisen", "tv", 2020))

    assert found.mal_id is None and found.image is None


def test_undecodable_body_is_a_network_error():
    http = HttpClient("https://anilibria.tv")
    http._session = UndecodableSession()

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(http.get_text("https://anilibria.tv/release/broken.html"))

    assert excinfo.value.url == "https://anilibria.tv/release/broken.html"
