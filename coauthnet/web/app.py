"""
coauthnet web application - serve co-authorship graphs.

run:
    uvicorn coauthnet.web.app:app --host 0.0.0.0 --port 8765

endpoints:
    GET  /                  → rendered page for the served collection
    GET  /api/graph         → graph payload for the served collection
    PUT  /api/collection    → replace the served collection
    POST /api/graph         → graph payload for posted publications
    POST /graph             → rendered page for posted publications
"""

import logging
from typing import List, Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from ..core.config import CoauthnetConfig
from ..core.models import Publication
from ..inputs.collection import publications_from_dicts
from ..visualization.graph_builder import GraphBuilder, GraphCache
from ..visualization.html_renderer import HTMLRenderer

logger = logging.getLogger("coauthnet.web")


config = CoauthnetConfig.default()
builder = GraphBuilder(config.graph)
renderer = HTMLRenderer(config.render)

# served collection; replaced wholesale so the cache sees a new object
collection: List[Publication] = []
cache = GraphCache(builder)

app = FastAPI(title="coauthnet", description="Co-authorship network graphs")


class AuthorIn(BaseModel):
    name: str = Field(min_length=1)
    affiliation: Optional[str] = None
    isHighlighted: bool = False


class PublicationIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None
    authors: List[AuthorIn] = Field(default_factory=list)


class CollectionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    publications: List[PublicationIn] = Field(default_factory=list)
    highlight: List[str] = Field(default_factory=list)


class GraphRequest(CollectionRequest):
    title: str = "Co-authorship Network"
    description: Optional[str] = None


def _to_publications(request: CollectionRequest) -> List[Publication]:
    return publications_from_dicts(
        (p.model_dump() for p in request.publications),
        highlight=request.highlight
    )


def set_collection(publications: List[Publication]):
    """replace the served collection."""
    global collection
    collection = list(publications)
    logger.info(f"serving {len(collection)} publications")


@app.get("/", response_class=HTMLResponse)
async def index():
    graph = cache.get(collection)
    return renderer.render_html(graph)


@app.get("/api/graph")
async def get_graph():
    return cache.get(collection).to_dict()


@app.put("/api/collection")
async def put_collection(request: CollectionRequest):
    set_collection(_to_publications(request))
    graph = cache.get(collection)
    return {
        "publication_count": len(collection),
        "node_count": len(graph.nodes),
        "link_count": len(graph.links),
    }


@app.post("/api/graph")
async def post_graph(request: GraphRequest):
    graph = builder.build(_to_publications(request))
    return graph.to_dict()


@app.post("/graph", response_class=HTMLResponse)
async def post_graph_page(request: GraphRequest):
    graph = builder.build(_to_publications(request))
    return renderer.render_html(graph, title=request.title, description=request.description)
