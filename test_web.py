#!/usr/bin/env python3
"""
test the coauthnet web application.

run with: pytest test_web.py -v
"""

import pytest
from fastapi.testclient import TestClient

from coauthnet.web import app as web_app


PUBLICATIONS = [
    {"id": "p1", "title": "One", "authors": [{"name": "A", "isHighlighted": True}, {"name": "B"}]},
    {"id": "p2", "title": "Two", "authors": [{"name": "A"}, {"name": "C", "affiliation": "MIT"}]},
    {"id": "p3", "title": "Three", "authors": [{"name": "A"}, {"name": "B"}]},
]


@pytest.fixture
def client():
    web_app.set_collection([])
    web_app.cache.clear()
    return TestClient(web_app.app)


class TestGraphAPI:
    """test graph payload endpoints."""

    def test_post_graph(self, client):
        resp = client.post("/api/graph", json={"publications": PUBLICATIONS})
        assert resp.status_code == 200

        data = resp.json()
        nodes = {n["id"]: n for n in data["nodes"]}
        assert nodes["A"]["publicationsCount"] == 3
        assert nodes["A"]["isHighlighted"]
        assert nodes["A"]["r"] == 8.0
        assert nodes["C"]["group"] == "MIT"
        assert nodes["B"]["group"] == "Unknown"

        links = {(l["source"], l["target"]): l for l in data["links"]}
        assert links[("A", "B")]["weight"] == 2
        assert len(links[("A", "B")]["publications"]) == 2
        assert ("B", "C") not in links

    def test_post_highlight(self, client):
        resp = client.post("/api/graph", json={"publications": PUBLICATIONS, "highlight": ["c"]})
        nodes = {n["id"]: n for n in resp.json()["nodes"]}
        assert nodes["C"]["isHighlighted"]

    def test_post_empty(self, client):
        resp = client.post("/api/graph", json={})
        assert resp.json() == {"nodes": [], "links": []}

    def test_invalid_author(self, client):
        resp = client.post("/api/graph", json={"publications": [{"authors": [{"name": ""}]}]})
        assert resp.status_code == 422


class TestCollection:
    """test the served collection and its cache."""

    def test_empty_collection(self, client):
        assert client.get("/api/graph").json() == {"nodes": [], "links": []}
        assert 'class="placeholder"' in client.get("/").text

    def test_put_then_get(self, client):
        resp = client.put("/api/collection", json={"publications": PUBLICATIONS})
        assert resp.json() == {"publication_count": 3, "node_count": 3, "link_count": 2}

        builds = web_app.cache.builds
        data = client.get("/api/graph").json()
        assert len(data["nodes"]) == 3
        client.get("/api/graph")
        assert web_app.cache.builds == builds

        page = client.get("/").text
        assert "ForceGraph" in page

    def test_replace_rebuilds(self, client):
        client.put("/api/collection", json={"publications": PUBLICATIONS})
        client.put("/api/collection", json={"publications": PUBLICATIONS[:1]})
        assert len(client.get("/api/graph").json()["nodes"]) == 2

    def test_collection_rejects_page_fields(self, client):
        resp = client.put("/api/collection", json={"publications": PUBLICATIONS, "title": "Lab"})
        assert resp.status_code == 422


class TestPages:
    """test rendered pages."""

    def test_post_page(self, client):
        resp = client.post("/graph", json={
            "publications": PUBLICATIONS, "title": "Lab", "description": "our people"
        })
        assert resp.status_code == 200
        assert "<title>Lab</title>" in resp.text
        assert "<p>our people</p>" in resp.text
