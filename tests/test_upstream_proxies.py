import json

import httpx
import pytest


# ---------- Missing parameters never reach upstream ----------
@pytest.mark.parametrize("path, params", [
    ("/api/animepahe/search", {}),
    ("/api/animepahe/episodes", {"page": "2"}),
    ("/api/comick/search", {}),
    ("/api/comick/chapters", {"limit": "10"}),
    ("/api/comick/images", {}),
    ("/api/mangadex/search", {}),
    ("/api/mangadex/chapters", {}),
    ("/api/proxy-image", {}),
    ("/api/proxy/stream", {}),
])
def test_missing_params_rejected(client, upstream, path, params):
    resp = client.get(path, params=params)
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert upstream.requests == []


# ---------- AniList ----------
def test_anilist_relays_payload(client, upstream):
    payload = {"query": "query ($id: Int) { Media(id: $id) { id } }", "variables": {"id": 1}}
    upstream.handler = lambda request: httpx.Response(200, json={"data": {"Media": {"id": 1}}})

    resp = client.post("/api/anilist", json=payload)
    assert resp.status_code == 200
    assert resp.json() == {"data": {"Media": {"id": 1}}}
    assert resp.headers["cache-control"] == "public, max-age=3600"

    sent = upstream.requests[0]
    assert sent.method == "POST"
    assert sent.url.host == "graphql.anilist.co"
    assert json.loads(sent.content) == payload


def test_anilist_error_passes_status_and_raw_text(client, upstream):
    upstream.handler = lambda request: httpx.Response(429, text="Too Many Requests.")
    resp = client.post("/api/anilist", json={"query": "{ x }"})
    assert resp.status_code == 429
    assert resp.text == "Too Many Requests."


def test_anilist_network_failure_is_plain_500(client, upstream):
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    upstream.handler = handler
    resp = client.post("/api/anilist", json={"query": "{ x }"})
    assert resp.status_code == 500
    assert resp.text == "Internal error"


def test_anilist_malformed_body(client, upstream):
    resp = client.post("/api/anilist", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 500
    assert resp.text == "Internal error"
    assert upstream.requests == []


# ---------- AnimePahe ----------
def test_animepahe_search_encodes_query(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"data": [{"session": "abc"}]})
    resp = client.get("/api/animepahe/search", params={"q": "one piece & co"})
    assert resp.status_code == 200
    assert resp.json() == {"data": [{"session": "abc"}]}
    sent = upstream.requests[0]
    assert sent.url.path == "/api/search"
    assert sent.url.params["q"] == "one piece & co"


def test_animepahe_episodes_defaults_to_first_page(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"data": []})
    resp = client.get("/api/animepahe/episodes", params={"session": "abc-123"})
    assert resp.status_code == 200
    sent = upstream.requests[0]
    assert sent.url.path == "/api/abc-123/releases"
    assert sent.url.params["sort"] == "episode_asc"
    assert sent.url.params["page"] == "1"


def test_animepahe_upstream_error(client, upstream):
    upstream.handler = lambda request: httpx.Response(503, text="unavailable")
    resp = client.get("/api/animepahe/episodes", params={"session": "abc", "page": "2"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to fetch episode list"


# ---------- Comick ----------
def test_comick_search(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json=[{"hid": "xyz"}])
    resp = client.get("/api/comick/search", params={"query": "berserk"})
    assert resp.status_code == 200
    assert resp.json() == [{"hid": "xyz"}]
    assert upstream.requests[0].url.params["q"] == "berserk"


def test_comick_chapters_builds_params(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"chapters": [], "total": 0})
    resp = client.get("/api/comick/chapters", params={"hid": "xyz", "lang": "en", "chap-order": "1"})
    assert resp.status_code == 200
    params = upstream.requests[0].url.params
    assert upstream.requests[0].url.path == "/api/comic/xyz/chapters"
    assert params["limit"] == "60"
    assert params["page"] == "1"
    assert params["chap-order"] == "1"
    assert params["lang"] == "en"
    assert "date-order" not in params
    assert "chap" not in params


def test_comick_chapters_embedded_500_becomes_404(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"statusCode": 500, "message": "oops"})
    resp = client.get("/api/comick/chapters", params={"hid": "xyz"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "Chapters not found on Comick."


def test_comick_images_requires_list(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"error": "nope"})
    resp = client.get("/api/comick/images", params={"chapterId": "c1"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "No images returned"


def test_comick_images(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json=[{"url": "a.jpg"}, {"url": "b.jpg"}])
    resp = client.get("/api/comick/images", params={"chapterId": "c1"})
    assert resp.status_code == 200
    assert len(resp.json()) == 2
    assert upstream.requests[0].url.path == "/api/chapter/c1/get_images"


# ---------- MangaDex ----------
def test_mangadex_search(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"result": "ok", "data": []})
    resp = client.get("/api/mangadex/search", params={"query": "vinland saga"})
    assert resp.status_code == 200
    sent = upstream.requests[0]
    assert sent.url.path == "/manga"
    assert sent.url.params["title"] == "vinland saga"
    assert sent.headers["accept"] == "application/json"


def test_mangadex_search_upstream_error(client, upstream):
    upstream.handler = lambda request: httpx.Response(500, json={"result": "error"})
    resp = client.get("/api/mangadex/search", params={"query": "x"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to search manga"


def test_mangadex_chapters_non_json_is_502_with_snippet(client, upstream):
    html = "<html><body>" + "Cloudflare " * 100 + "</body></html>"
    upstream.handler = lambda request: httpx.Response(503, text=html)

    resp = client.get("/api/mangadex/chapters", params={"mangaId": "m-1"})
    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "MangaDex returned non-JSON response"
    assert len(body["details"]) <= 200
    assert body["details"] == html[:200]


def test_mangadex_chapters_error_status_passthrough(client, upstream):
    upstream.handler = lambda request: httpx.Response(404, json={"result": "error", "errors": []})
    resp = client.get("/api/mangadex/chapters", params={"mangaId": "m-1"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "MangaDex API error", "details": {"result": "error", "errors": []}}


def test_mangadex_chapters(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"data": [{"id": "c1"}], "total": 1})
    resp = client.get("/api/mangadex/chapters", params={"mangaId": "m-1"})
    assert resp.status_code == 200
    assert resp.json()["total"] == 1
    assert upstream.requests[0].url.path == "/manga/m-1/feed"
