import json

import pytest

from anistream.core.config_manager import ConfigManager


LISTING_HTML = """
<table><tr>
<td><a href="/release/naruto.html"><img src="/upload/posters/naruto.jpg"><span>Naruto</span></a></td>
<td><a href="https://anilibria.tv/release/chainsaw-man.html"><span> Человек-бензопила </span></a></td>
<td><a href="/release/untitled.html"><img src="/upload/posters/none.jpg"></a></td>
<td><a href="/release/blank.html"><span>   </span></a></td>
</tr></table>
"""

DETAIL_HTML = """
<html><body>
<h1 class="release-title">Магическая битва<br>Jujutsu Kaisen</h1>
<img id="adminPoster" src="/upload/release/350x500/9000.jpg">
<div id="xreleaseInfo">
<b>Сезон:</b> <a href="/pages/catalog.php">зима 2020</a><br>
<b>Тип:</b> ТВ (24 эп.), 25 мин.<br>
<b>Жанры:</b> Магия, Сверхъестественное, Сёнен<br>
</div>
<p class="detail-description">Юдзи Итадори обладает невероятной физической силой.</p>
<script>
var player = new Playerjs({id:"anilibriaPlayer", file:[{"title":"Серия 1","file":"[480p]//cache.libria.fun/1/480.m3u8,[720p]//cache.libria.fun/1/720.m3u8","poster":"/upload/ep1.jpg"},{"title":"Серия 2","file":"[480p]//cache.libria.fun/2/480.m3u8"},{"title":"Трейлер"}], default_quality:"720p"});
</script>
</body></html>
"""

TRACKER_PAYLOAD = {
    "currentPage": 1,
    "results": [
        {
            "id": "21",
            "malId": 21,
            "title": {"romaji": "One Piece", "english": "One Piece"},
            "releaseDate": 1999,
            "type": "TV",
            "image": "https://img.example/one-piece.jpg",
        },
        {
            "id": 113415,
            "malId": 40748,
            "title": {"romaji": "Jujutsu Kaisen", "english": "JUJUTSU KAISEN"},
            "releaseDate": 2020,
            "type": "TV",
            "image": "https://img.example/jjk.jpg",
            "cover": "https://img.example/jjk-cover.jpg",
        },
    ],
}


@pytest.fixture
def listing_html():
    return LISTING_HTML


@pytest.fixture
def detail_html():
    return DETAIL_HTML


@pytest.fixture
def tracker_payload():
    return json.loads(json.dumps(TRACKER_PAYLOAD))


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(tmp_path / "config")
