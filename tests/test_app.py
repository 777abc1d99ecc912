import main


def test_health(anonymous_client):
    res = anonymous_client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_unknown_route_uses_envelope(anonymous_client):
    res = anonymous_client.get("/v1/nothing-here")

    assert res.status_code == 404
    assert res.json() == {"status": 404, "message": "Not Found"}


def test_wrong_method_uses_envelope(client):
    res = client.patch("/v1/tags")

    assert res.status_code == 405
    assert res.json()["status"] == 405


def test_malformed_json_is_bad_request(client):
    res = client.post(
        "/v1/notes",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert res.status_code == 400
    assert res.json()["message"].startswith("Invalid request")


def test_unhandled_store_error_is_generic_500(client, database):
    database.fail_next("select", "bookmarks", RuntimeError("connection reset by peer"))

    res = client.get("/v1/bookmarks")

    assert res.status_code == 500
    assert res.json() == {"status": 500, "message": "Internal server error"}


def test_cors_allows_known_origin(anonymous_client):
    res = anonymous_client.options(
        "/v1/notes",
        headers={
            "Origin": "https://turbodoc.ai",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Authorization",
        },
    )

    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "https://turbodoc.ai"


def test_every_resource_router_is_mounted():
    paths = set(main.app.openapi()["paths"])

    for expected in (
        "/v1/bookmarks",
        "/v1/bookmarks/search",
        "/v1/bookmarks/og-image",
        "/v1/bookmarks/batch",
        "/v1/tags",
        "/v1/notes",
        "/v1/notes/batch",
        "/v1/code-snippets",
        "/v1/diagrams/{diagram_id}/duplicate",
        "/v1/contact",
    ):
        assert expected in paths
