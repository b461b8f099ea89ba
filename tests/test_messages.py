"""Integration tests for the listing and submission endpoints."""

from __future__ import annotations

import re

from sqlalchemy.exc import OperationalError

from board.services.message_store import MAX_OFFSET

PAGE_SIZE = 100


def _names(html: str) -> list[str]:
    return re.findall(r'<div class="message"><h3>(.*?) <span>', html)


def test_empty_board_renders_form_without_pagination(client):
    """An empty store still renders the form and no controls."""

    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert '<form method="POST" action="/add">' in html
    assert 'name="name"' in html
    assert 'name="message"' in html
    assert _names(html) == []
    assert 'class="back"' not in html
    assert 'class="more"' not in html


def test_submission_redirects_to_listing(client):
    response = client.post(
        "/add",
        data={"name": "Alice", "message": "Hello there"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"

    html = client.get("/").text
    assert _names(html) == ["Alice"]
    assert "<p>Hello there</p>" in html


def test_script_markup_is_stripped_before_storage(client):
    client.post("/add", data={"name": "Alice", "message": "<script>x</script>Hello"})

    html = client.get("/").text
    assert "<script>" not in html
    assert "<p>Hello</p>" in html


def test_escaped_text_is_not_escaped_twice(client):
    client.post("/add", data={"name": "a < b & c", "message": "1 > 0"})

    html = client.get("/").text
    assert _names(html) == ["a &lt; b &amp; c"]
    assert "<p>1 &gt; 0</p>" in html
    assert "&amp;amp;" not in html
    assert "&amp;lt;" not in html


def test_empty_fields_are_stored_by_default(client):
    response = client.post("/add", data={"name": "", "message": ""})

    assert response.status_code == 200
    html = client.get("/").text
    assert _names(html) == [""]
    assert "<p></p>" in html


def test_missing_fields_are_treated_as_empty(client):
    client.post("/add", data={})

    assert _names(client.get("/").text) == [""]


def test_empty_fields_rejected_when_disallowed(make_client):
    client = make_client(allow_empty=False)

    response = client.post("/add", data={"name": "Bob", "message": ""})

    assert response.status_code == 400
    assert "Both a name and a message are required." in response.text
    assert _names(client.get("/").text) == []


def test_markup_only_name_counts_as_empty_after_sanitising(make_client):
    client = make_client(allow_empty=False)

    response = client.post("/add", data={"name": "<b></b>", "message": "hi"})

    assert response.status_code == 400


def test_listing_is_newest_first(client):
    for name in ("first", "second", "third"):
        client.post("/add", data={"name": name, "message": "m"})

    assert _names(client.get("/").text) == ["third", "second", "first"]


def test_first_page_shows_more_link_only(client, seed_messages):
    seed_messages(PAGE_SIZE + 5)

    html = client.get("/").text

    names = _names(html)
    assert len(names) == PAGE_SIZE
    assert names[0] == "msg-104"
    assert 'class="back"' not in html
    assert f'href="/?offset={PAGE_SIZE}"' in html


def test_last_page_shows_back_link_only(client, seed_messages):
    seed_messages(PAGE_SIZE + 5)

    html = client.get("/", params={"offset": PAGE_SIZE}).text

    assert _names(html) == [f"msg-{n}" for n in range(4, -1, -1)]
    assert '<a class="back" href="/">' in html
    assert 'class="more"' not in html


def test_exactly_full_page_offers_more(client, seed_messages):
    seed_messages(PAGE_SIZE)

    first = client.get("/").text
    assert len(_names(first)) == PAGE_SIZE
    assert f'href="/?offset={PAGE_SIZE}"' in first

    second = client.get("/", params={"offset": PAGE_SIZE}).text
    assert _names(second) == []
    assert 'class="back"' in second
    assert 'class="more"' not in second


def test_offset_past_end_returns_empty_page(client, seed_messages):
    seed_messages(3)

    html = client.get("/", params={"offset": 500}).text

    assert _names(html) == []
    assert 'class="back"' in html


def test_configured_page_size_is_honoured(make_client, seed_messages):
    seed_messages(5)
    client = make_client(page_size=2)

    html = client.get("/", params={"offset": 2}).text

    assert _names(html) == ["msg-2", "msg-1"]
    assert 'href="/?offset=4"' in html


def test_invalid_offset_is_a_bad_request(client):
    for value in ("-1", "abc", str(2**64), str(MAX_OFFSET + 1)):
        response = client.get("/", params={"offset": value})
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/html")


def test_largest_offset_returns_empty_page(client, seed_messages):
    seed_messages(3)

    response = client.get("/", params={"offset": MAX_OFFSET})

    assert response.status_code == 200
    assert _names(response.text) == []
    assert 'class="more"' not in response.text


def test_store_failure_maps_to_generic_500(client):
    """Database errors never leak their details to the browser."""

    def failing_factory():
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    client.app.state.store._session_factory = failing_factory

    response = client.get("/")

    assert response.status_code == 500
    assert "Internal server error" in response.text
    assert "disk I/O error" not in response.text
    assert "SELECT" not in response.text


def test_unknown_route_renders_html_404(client):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/html")


def test_plain_variant_lists_every_row_verbatim(make_client, seed_messages):
    seed_messages(3)
    client = make_client(variant="plain", page_size=2)

    client.post("/add", data={"name": "Eve", "message": "<b>hi</b>"})
    html = client.get("/", params={"offset": 2}).text

    assert "<pre>" in html
    assert "Eve: &lt;b&gt;hi&lt;/b&gt;" in html
    for n in range(3):
        assert f"msg-{n}: content-{n}" in html
    assert 'class="back"' not in html
    assert 'class="more"' not in html


def test_health_and_metrics(client):
    client.post("/add", data={"name": "Alice", "message": "Hello"})

    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "board_messages_created_total" in metrics.text
    assert "http_requests_total" in metrics.text


def test_failed_insert_maps_to_generic_500(client):
    """A write that the database refuses never leaks its details either."""

    def failing_factory():
        raise OperationalError(
            "INSERT INTO messages (name, content) VALUES (?, ?)",
            {},
            Exception("database is locked"),
        )

    client.app.state.store._session_factory = failing_factory

    response = client.post(
        "/add",
        data={"name": "Alice", "message": "Hello"},
        follow_redirects=False,
    )

    assert response.status_code == 500
    assert "Internal server error" in response.text
    assert "database is locked" not in response.text
    assert "INSERT" not in response.text


def test_featured_board_cleans_rows_stored_verbatim(make_client):
    """Rows written by the plain board are cleaned when a featured board shows them."""

    plain = make_client(variant="plain")
    plain.post("/add", data={"name": "<b>Mallory</b>", "message": "<script>alert(1)</script>hi"})

    featured = make_client()
    html = featured.get("/").text

    assert "<script>" not in html
    assert "alert(1)" not in html
    assert "<b>Mallory</b>" not in html
    assert _names(html) == ["Mallory"]
    assert "<p>hi</p>" in html
