import pytest

from amusebridge.core.host_bridge import HostBridgeError

SONG = {
    "id": 1,
    "name": "Song",
    "alias": ["歌曲"],
    "dt": 180000,
    "ar": [{"id": 2, "name": "Artist", "alias": []}],
    "al": {"id": 3, "name": "Album", "picUrl": "http://img/3.jpg", "alias": []},
}


def test_query_returns_default_when_nothing_playing(client, player_source, make_raw_state):
    player_source.results = [make_raw_state({"id": 9})]

    response = client.get("/query")

    assert response.status_code == 200
    payload = response.json()
    assert payload["player"] == {
        "hasSong": False,
        "isPaused": True,
        "volumePercent": 0,
        "seekbarCurrentPosition": 0,
        "seekbarCurrentPositionHuman": "0:00",
        "statePercent": 0,
        "likeStatus": "INDIFFERENT",
        "repeatType": "NONE",
    }
    assert payload["track"] == {
        "author": "",
        "title": "",
        "album": "",
        "cover": "",
        "duration": 0,
        "durationHuman": "0:00",
        "url": "",
        "id": "",
        "isVideo": False,
        "isAdvertisement": False,
        "inLibrary": False,
    }


def test_query_returns_normalized_track(client, player_source, make_raw_state):
    player_source.results = [make_raw_state(SONG, repeatMode="on", isCurrentTrackLiked="LIKE")]

    response = client.get("/query")

    assert response.status_code == 200
    payload = response.json()
    assert payload["player"]["hasSong"] is True
    assert payload["player"]["isPaused"] is False
    assert payload["player"]["repeatType"] == "ONE"
    assert payload["player"]["likeStatus"] == "LIKE"
    assert payload["track"]["title"] == "Song（歌曲）"
    assert payload["track"]["author"] == "Artist"
    assert payload["track"]["duration"] == 179
    assert payload["track"]["durationHuman"] == "2:59"
    assert payload["track"]["id"] == "1"


def test_host_failure_returns_500_and_keeps_serving(client, player_source, make_raw_state):
    player_source.results = [
        HostBridgeError("Host unreachable at http://127.0.0.1:9222"),
        make_raw_state(SONG),
    ]

    failed = client.get("/query")
    recovered = client.get("/query")

    assert failed.status_code == 500
    assert failed.json() == {"error": "Host unreachable at http://127.0.0.1:9222"}
    assert recovered.status_code == 200
    assert recovered.json()["track"]["title"] == "Song（歌曲）"
    assert player_source.calls == 2


def test_unexpected_bridge_exception_is_reported(client, player_source):
    player_source.results = [RuntimeError("script execution failed")]

    response = client.get("/query")

    assert response.status_code == 500
    assert response.json()["error"] == "script execution failed"


def test_cors_allows_any_origin(client, player_source, make_raw_state):
    player_source.results = [make_raw_state()]

    response = client.get("/query", headers={"Origin": "http://overlay.local"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize("header", ["X-Requested-With", "Content-Type", "Accept", "Origin"])
def test_cors_preflight_allows_widget_headers(client, header):
    response = client.options(
        "/query",
        headers={
            "Origin": "http://overlay.local",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": header,
        },
    )

    assert response.status_code == 200
    assert header.lower() in response.headers["access-control-allow-headers"].lower()
