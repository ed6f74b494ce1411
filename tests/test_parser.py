import json

import pytest

from anistream.core.exceptions import LoadError, PluginError
from anistream.core.models import DubStatus, Quality, TvType
from anistream.plugins.anilibria.parser import AnilibriaParser, get_track_type, get_type
from anistream.plugins.common import HTMLParser


BASE = "https://anilibria.tv"


@pytest.fixture
def parser():
    return AnilibriaParser(base_url=BASE, api_name="Anilibria")


def test_listing_keeps_anchors_with_titles_in_order(parser, listing_html):
    items = parser.parse_listing(listing_html)

    assert [item.title for item in items] == ["Naruto", "Человек-бензопила"]
    assert items[0].url == "https://anilibria.tv/release/naruto.html"
    assert items[0].poster_url == "https://anilibria.tv/upload/posters/naruto.jpg"
    assert items[1].url == "https://anilibria.tv/release/chainsaw-man.html"
    assert items[1].poster_url is None
    for item in items:
        assert item.api_name == "Anilibria"
        assert item.type == TvType.ANIME
        assert item.dub_status == [DubStatus.DUBBED]


def test_listing_skips_anchors_without_web_links(parser):
    html = (
        '<a href="/release/a.html"><span>A</span></a>'
        '<a href="javascript:void(0)"><span>Broken</span></a>'
        '<a href="mailto:team@anilibria.tv"><span>Mail</span></a>'
        '<a href="/release/b.html"><span>B</span></a>'
    )

    items = parser.parse_listing(html)

    assert [item.title for item in items] == ["A", "B"]
    assert items[1].url == "https://anilibria.tv/release/b.html"


def test_empty_listing_fragment_has_no_items(parser):
    assert parser.parse_listing("") == []


def test_home_envelope_is_unwrapped(parser, listing_html):
    items = parser.parse_home(json.dumps({"table": listing_html, "err": "ok"}))
    assert len(items) == 2


def test_search_envelope_is_unwrapped(parser, listing_html):
    items = parser.parse_search(json.dumps({"mes": listing_html}))
    assert items[0].title == "Naruto"


@pytest.mark.parametrize("body", [
    "<html>502 Bad Gateway</html>",
    json.dumps({"err": "fail"}),
    json.dumps({"table": None}),
    json.dumps(["table"]),
])
def test_bad_home_envelope_raises_load_error(parser, body):
    with pytest.raises(LoadError) as excinfo:
        parser.parse_home(body)

    assert excinfo.value.message == "Invalid json responses"
    assert isinstance(excinfo.value, PluginError)


def test_search_envelope_without_mes_raises_load_error(parser, listing_html):
    with pytest.raises(LoadError):
        parser.parse_search(json.dumps({"table": listing_html}))


def test_detail_page_fields(parser, detail_html):
    detail = parser.parse_detail(detail_html)

    assert detail["title"] == "Магическая битва Jujutsu Kaisen"
    assert detail["track_title"] == "Jujutsu Kaisen"
    assert detail["poster"] == "https://anilibria.tv/upload/release/350x500/9000.jpg"
    assert detail["type_label"] == "ТВ (24 эп.)"
    assert detail["type"] == TvType.ANIME
    assert detail["track_type"] == "tv"
    assert detail["year"] == 2020
    assert detail["plot"] == "Юдзи Итадори обладает невероятной физической силой."
    assert detail["tags"] == ["Магия", "Сверхъестественное", "Сёнен"]


def test_detail_episodes_come_from_player_script(parser, detail_html):
    episodes = parser.parse_detail(detail_html)["episodes"]

    # The trailer entry has no file and is dropped
    assert [episode.name for episode in episodes] == ["Серия 1", "Серия 2"]
    assert episodes[0].data == "[480p]//cache.libria.fun/1/480.m3u8,[720p]//cache.libria.fun/1/720.m3u8"
    assert episodes[0].poster_url == "https://anilibria.tv/upload/ep1.jpg"
    assert episodes[1].poster_url is None


def test_detail_without_title_is_none(parser):
    assert parser.parse_detail("<html><body><h1>Not a release</h1></body></html>") is None


def test_detail_without_player_or_labels(parser):
    detail = parser.parse_detail('<h1 class="release-title">Без плеера</h1>')

    assert detail["episodes"] == []
    assert detail["type"] == TvType.OVA
    assert detail["track_type"] == "tv"
    assert detail["year"] is None
    assert detail["tags"] == []
    assert detail["poster"] is None
    assert detail["plot"] is None


def test_track_title_falls_back_to_text_after_slash(parser):
    detail = parser.parse_detail('<h1 class="release-title">Ванпанчмен / One Punch Man</h1>')
    assert detail["track_title"] == "One Punch Man"


def test_broken_playlist_gives_no_episodes(parser):
    document = HTMLParser('<script>var player = new Playerjs({file:[{"title": oops}], x:1});</script>')
    assert parser.parse_episodes(document) == []


@pytest.mark.parametrize("label, expected", [
    ("Фильм", TvType.MOVIE),
    ("фильм (1 эп.)", TvType.MOVIE),
    ("ТВ (12 эп.)", TvType.ANIME),
    ("тв", TvType.ANIME),
    ("OVA", TvType.OVA),
    ("ONA", TvType.OVA),
    ("", TvType.OVA),
    (None, TvType.OVA),
])
def test_get_type(label, expected):
    assert get_type(label) == expected


def test_get_track_type():
    assert get_track_type("Фильм") == "movie"
    assert get_track_type("ТВ (12 эп.)") == "tv"
    assert get_track_type(None) == "tv"


def test_links_keep_token_order(parser):
    data = "[480p]//cache.libria.fun/1/480.m3u8, [720p]https://cache.libria.fun/1/720.m3u8,[1080p]//cache.libria.fun/1/1080.m3u8"
    links = parser.parse_links(data, referer="https://anilibria.tv/")

    assert [link.url for link in links] == [
        "https://cache.libria.fun/1/480.m3u8",
        "https://cache.libria.fun/1/720.m3u8",
        "https://cache.libria.fun/1/1080.m3u8",
    ]
    assert [link.quality for link in links] == [Quality.LOW, Quality.MEDIUM, Quality.HIGH]
    for link in links:
        assert link.is_m3u8
        assert link.referer == "https://anilibria.tv/"
        assert link.source == "Anilibria"
        assert link.headers == {"Referer": "https://anilibria.tv/"}


def test_untagged_and_odd_tokens(parser):
    links = parser.parse_links("https://host/plain.m3u8,[999p]https://host/odd.m3u8,, ", referer="")

    assert [link.url for link in links] == ["https://host/plain.m3u8", "https://host/odd.m3u8"]
    assert [link.quality for link in links] == [Quality.UNKNOWN, Quality.UNKNOWN]
    assert not links[0].requires_referer
