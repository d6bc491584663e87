"""
coauthnet - co-authorship network builder.
"""

from .core.config import CoauthnetConfig
from .core.models import Author, Publication, AuthorNode, CoAuthorLink, CoAuthorGraph
from .visualization.graph_builder import GraphBuilder, GraphCache, build_graph
from .visualization.render_adapter import RenderAdapter
from .visualization.exporter import GraphExporter
from .visualization.html_renderer import HTMLRenderer
from .inputs.collection import load_collection

__version__ = "0.1.0"

__all__ = [
    "CoauthnetConfig",
    "Author",
    "Publication",
    "AuthorNode",
    "CoAuthorLink",
    "CoAuthorGraph",
    "GraphBuilder",
    "GraphCache",
    "build_graph",
    "RenderAdapter",
    "GraphExporter",
    "HTMLRenderer",
    "load_collection"
]
