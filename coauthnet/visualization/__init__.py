# visualization - graph building and rendering
from .graph_builder import (
    GraphBuilder, GraphCache, build_graph, to_networkx,
    MIN_NODE_RADIUS, MAX_NODE_RADIUS
)
from .render_adapter import RenderAdapter
from .exporter import GraphExporter
from .html_renderer import HTMLRenderer
