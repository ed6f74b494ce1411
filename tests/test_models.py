import pytest
from pydantic import ValidationError

from anistream.core.exceptions import LoadError, PluginError
from anistream.core.models import DubStatus, Episode, ExtractorLink, LoadResponse, SearchResult, TvType


def test_search_result_requires_absolute_url():
    with pytest.raises(ValidationError):
        SearchResult(title="Naruto", url="/release/naruto.html", api_name="Anilibria")


def test_search_result_title_is_stripped():
    item = SearchResult(title="  Naruto ", url="https://anilibria.tv/release/naruto.html", api_name="Anilibria")
    assert item.title == "Naruto"
    assert item.type == TvType.ANIME
    assert item.dub_status == []


def test_add_episodes_ignores_empty_lists():
    detail = LoadResponse(title="Naruto", url="https://anilibria.tv/release/naruto.html", api_name="Anilibria")

    detail.add_episodes(DubStatus.SUBBED, [])
    detail.add_episodes(DubStatus.DUBBED, None)
    assert detail.episodes == {}

    detail.add_episodes(DubStatus.SUBBED, [Episode(data="[480p]//host/1.m3u8", name="Серия 1")])
    assert [str(episode) for episode in detail.all_episodes] == ["Серия 1"]


def test_load_response_drops_blank_tags():
    detail = LoadResponse(
        title="Naruto",
        url="https://anilibria.tv/release/naruto.html",
        api_name="Anilibria",
        tags=["Сёнен", " ", ""],
    )
    assert detail.tags == ["Сёнен"]


def test_extractor_link_needs_url():
    with pytest.raises(ValidationError):
        ExtractorLink(source="Anilibria", name="Anilibria", url="")


def test_extractor_link_without_referer():
    link = ExtractorLink(source="Anilibria", name="Anilibria", url="https://host/a.m3u8")
    assert not link.requires_referer
    assert link.headers == {}


def test_load_error_is_a_plugin_error():
    error = LoadError(plugin_name="Anilibria")
    assert isinstance(error, PluginError)
    assert str(error) == "Invalid json responses"
