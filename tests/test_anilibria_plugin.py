import asyncio
import json

import pytest

from anistream.core.exceptions import LoadError, NetworkError, PluginError
from anistream.core.models import DubStatus, Quality, TvType
from anistream.plugins.anilibria import AnilibriaPlugin
from anistream.plugins.anilibria.plugin import MAIN_PAGE


class FakeHttp:
    """Records requests and replays canned bodies."""

    def __init__(self, text="", payload=None, error=None):
        self.text = text
        self.payload = payload
        self.error = error
        self.calls = []

    async def post_text(self, url, data=None, headers=None, **kwargs):
        self.calls.append(("POST", url, data, headers))
        return self.text

    async def get_text(self, url, **kwargs):
        self.calls.append(("GET", url, None, None))
        return self.text

    async def get_json(self, url, **kwargs):
        self.calls.append(("JSON", url, None, None))
        if self.error is not None:
            raise self.error
        return self.payload


def make_plugin(monkeypatch, text="", payload=None, error=None, **config):
    plugin = AnilibriaPlugin(config or None)
    fake = FakeHttp(text=text, payload=payload, error=error)
    for method in ("post_text", "get_text", "get_json"):
        monkeypatch.setattr(plugin.http, method, getattr(fake, method))
    return plugin, fake


def test_default_configuration():
    plugin = AnilibriaPlugin()

    assert plugin.base_url == "https://anilibria.tv"
    assert plugin.name == "Anilibria"
    assert plugin.metadata.has_main_page
    assert plugin.metadata.lang == "ru"
    assert [request.data for request in plugin.main_page] == ["1", "2"]


def test_invalid_configuration_falls_back_to_defaults():
    plugin = AnilibriaPlugin({"base_url": "anilibria.tv", "timeout": 1})
    assert plugin.base_url == "https://anilibria.tv"


def test_trailing_slash_is_stripped():
    plugin = AnilibriaPlugin({"base_url": "https://mirror.example/"})
    assert plugin.base_url == "https://mirror.example"


def test_main_page_posts_catalog_form(monkeypatch, listing_html):
    plugin, fake = make_plugin(monkeypatch, text=json.dumps({"table": listing_html}))

    response = asyncio.run(plugin.get_main_page(3, MAIN_PAGE[1]))

    method, url, data, headers = fake.calls[0]
    assert method == "POST"
    assert url == "https://anilibria.tv/public/catalog.php"
    assert data == {
        "page": "3",
        "xpage": "catalog",
        "sort": "2",
        "finish": "1",
        "search": '{"year":"","genre":"","season":""}',
    }
    assert headers == {"X-Requested-With": "XMLHttpRequest"}

    assert len(response.items) == 1
    assert response.items[0].name == "Популярное"
    assert [item.title for item in response.items[0].items] == ["Naruto", "Человек-бензопила"]


def test_main_page_with_broken_envelope(monkeypatch):
    plugin, _ = make_plugin(monkeypatch, text="<html>maintenance</html>")

    with pytest.raises(LoadError):
        asyncio.run(plugin.get_main_page(1, MAIN_PAGE[0]))


def test_search_posts_query(monkeypatch, listing_html):
    plugin, fake = make_plugin(monkeypatch, text=json.dumps({"mes": listing_html}))

    results = asyncio.run(plugin.search("  naruto "))

    method, url, data, headers = fake.calls[0]
    assert (method, url) == ("POST", "https://anilibria.tv/public/search.php")
    assert data == {"search": "naruto", "small": "1"}
    assert headers == {"X-Requested-With": "XMLHttpRequest"}
    assert results[0].title == "Naruto"


def test_search_with_empty_query(monkeypatch):
    plugin, fake = make_plugin(monkeypatch)

    with pytest.raises(PluginError):
        asyncio.run(plugin.search("   "))
    assert fake.calls == []


def test_load_enriches_from_tracker(monkeypatch, detail_html, tracker_payload):
    plugin, fake = make_plugin(monkeypatch, text=detail_html, payload=tracker_payload)
    url = "https://anilibria.tv/release/jujutsu-kaisen.html"

    detail = asyncio.run(plugin.load(url))

    assert fake.calls[0] == ("GET", url, None, None)
    assert fake.calls[1] == ("JSON", "https://api.consumet.org/meta/anilist/Jujutsu%20Kaisen", None, None)

    assert detail.title == "Магическая битва Jujutsu Kaisen"
    assert detail.url == url
    assert detail.api_name == "Anilibria"
    assert detail.type == TvType.ANIME
    assert detail.year == 2020
    assert detail.tags == ["Магия", "Сверхъестественное", "Сёнен"]
    assert detail.mal_id == 40748
    assert detail.anilist_id == 113415
    assert detail.poster_url == "https://img.example/jjk.jpg"
    assert detail.background_poster_url == "https://img.example/jjk-cover.jpg"
    assert list(detail.episodes) == [DubStatus.SUBBED]
    assert [episode.name for episode in detail.episodes[DubStatus.SUBBED]] == ["Серия 1", "Серия 2"]


def test_load_survives_tracker_failure(monkeypatch, detail_html):
    plugin, _ = make_plugin(
        monkeypatch,
        text=detail_html,
        error=NetworkError("HTTP 503 error", status_code=503),
    )

    detail = asyncio.run(plugin.load("https://anilibria.tv/release/jujutsu-kaisen.html"))

    assert detail.mal_id is None
    assert detail.anilist_id is None
    assert detail.poster_url == "https://anilibria.tv/upload/release/350x500/9000.jpg"
    assert detail.background_poster_url == detail.poster_url


def test_load_with_unexpected_tracker_payload(monkeypatch, detail_html):
    plugin, _ = make_plugin(monkeypatch, text=detail_html, payload={"results": "nope"})

    detail = asyncio.run(plugin.load("https://anilibria.tv/release/jujutsu-kaisen.html"))

    assert detail.mal_id is None
    assert detail.poster_url == "https://anilibria.tv/upload/release/350x500/9000.jpg"


def test_load_without_tracker(monkeypatch, detail_html, tracker_payload):
    plugin, fake = make_plugin(monkeypatch, text=detail_html, payload=tracker_payload, enable_tracker=False)

    detail = asyncio.run(plugin.load("https://anilibria.tv/release/jujutsu-kaisen.html"))

    assert [call[0] for call in fake.calls] == ["GET"]
    assert detail.mal_id is None


def test_load_page_without_title(monkeypatch):
    plugin, fake = make_plugin(monkeypatch, text="<html><body>404</body></html>")

    assert asyncio.run(plugin.load("https://anilibria.tv/release/missing.html")) is None
    assert len(fake.calls) == 1


def test_load_page_without_player(monkeypatch):
    plugin, _ = make_plugin(
        monkeypatch,
        text='<h1 class="release-title">Анонс</h1>',
        enable_tracker=False,
    )

    detail = asyncio.run(plugin.load("https://anilibria.tv/release/announce.html"))

    assert detail.episodes == {}
    assert detail.all_episodes == []


def test_load_links_emits_through_callback():
    plugin = AnilibriaPlugin()
    links, subtitles = [], []

    resolved = asyncio.run(plugin.load_links(
        "[480p]//cache.libria.fun/1/480.m3u8,[720p]//cache.libria.fun/1/720.m3u8",
        False,
        subtitles.append,
        links.append,
    ))

    assert resolved is True
    assert subtitles == []
    assert [(link.quality, link.url) for link in links] == [
        (Quality.LOW, "https://cache.libria.fun/1/480.m3u8"),
        (Quality.MEDIUM, "https://cache.libria.fun/1/720.m3u8"),
    ]
    assert all(link.referer == "https://anilibria.tv/" for link in links)


def test_validate_connection(monkeypatch):
    plugin, _ = make_plugin(monkeypatch, text="<html></html>")
    assert asyncio.run(plugin.validate_connection()) is True

    async def failing_get(url, **kwargs):
        raise NetworkError("Request failed", url=url)

    monkeypatch.setattr(plugin.http, "get_text", failing_get)
    assert asyncio.run(plugin.validate_connection()) is False
