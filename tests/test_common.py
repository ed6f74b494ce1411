from typing import List

import pytest

from anistream.core.models import Quality
from anistream.plugins.common import HTMLParser, QualityExtractor, TextCleaner, URLHelper, try_parse_json
from anistream.plugins.anilibria.parser import PlayerEpisode


@pytest.mark.parametrize("name, expected", [
    ("480p", Quality.LOW),
    ("720", Quality.MEDIUM),
    ("1080P", Quality.HIGH),
    ("2160p", Quality.FOUR_K),
    ("FHD", Quality.HIGH),
    ("4K", Quality.FOUR_K),
    ("999p", Quality.UNKNOWN),
    ("", Quality.UNKNOWN),
    (None, Quality.UNKNOWN),
    ("source", Quality.UNKNOWN),
])
def test_quality_from_name(name, expected):
    assert QualityExtractor.from_name(name) is expected


def test_quality_extract_from_text_orders_best_first():
    assert QualityExtractor.extract_from_text("480p / 1080p / 720p") == [Quality.HIGH, Quality.MEDIUM, Quality.LOW]


def test_quality_height():
    assert Quality.MEDIUM.height == 720
    assert Quality.UNKNOWN.height == 0
    assert Quality.from_height(360) is Quality.P360


@pytest.mark.parametrize("url, expected", [
    ("https://cdn.example/a.jpg", "https://cdn.example/a.jpg"),
    ("http://cdn.example/a.jpg", "http://cdn.example/a.jpg"),
    ("//cdn.example/a.jpg", "https://cdn.example/a.jpg"),
    ("/upload/a.jpg", "https://anilibria.tv/upload/a.jpg"),
    ("upload/a.jpg", "https://anilibria.tv/upload/a.jpg"),
])
def test_fix_url(url, expected):
    assert URLHelper.fix_url(url, "https://anilibria.tv") == expected


def test_fix_url_null():
    assert URLHelper.fix_url_null(None, "https://anilibria.tv") is None
    assert URLHelper.fix_url_null("  ", "https://anilibria.tv") is None


def test_text_cleaner():
    assert TextCleaner.substring_after("a / b", "/") == " b"
    assert TextCleaner.substring_after("ab", "/") == "ab"
    assert TextCleaner.substring_before("a, b", ",") == "a"
    assert TextCleaner.substring_before("ab", ",") == "ab"
    assert TextCleaner.digits_to_int("весна 2021") == 2021
    assert TextCleaner.digits_to_int("весна") is None
    assert TextCleaner.split_tags(" a, ,b ") == ["a", "b"]


def test_try_parse_json():
    entries = try_parse_json('[{"file": "x", "title": "1"}]', List[PlayerEpisode])
    assert entries[0].file == "x"
    assert try_parse_json("{oops", PlayerEpisode) is None
    assert try_parse_json(None, PlayerEpisode) is None


def test_label_lookup():
    document = HTMLParser('<div id="info"><b>Тип:</b> ТВ<br><b>Сезон:</b> <a>лето 2019</a></div>')

    assert document.text_after_label("div#info", "Тип:") == " ТВ"
    assert document.element_after_label("div#info", "Сезон:").get_text() == "лето 2019"
    assert document.text_after_label("div#info", "Жанры:") is None


def test_label_lookup_ignores_case():
    document = HTMLParser('<div id="info"><b>ТИП:</b> Фильм<br><b>жанры:</b> Драма</div>')

    assert document.text_after_label("div#info", "Тип:") == " Фильм"
    assert document.text_after_label("div#info", "Жанры:") == " Драма"
