"""
render adapter - maps the co-authorship graph onto force-graph settings.

the force-graph library owns simulation, drawing and interaction; this
module only supplies the payload, the styling callbacks and the static
configuration knobs it is driven with.
"""

from typing import Dict, Any, Optional

from ..core.config import RenderConfig
from ..core.models import AuthorNode, CoAuthorGraph


class RenderAdapter:
    """
    styling callbacks and renderer configuration.

    usage:
        adapter = RenderAdapter()
        props = adapter.to_props()
        payload = adapter.prepare(graph)
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def node_color(self, node: AuthorNode) -> str:
        """binary coloring: highlighted vs everyone else."""
        if node.is_highlighted:
            return self.config.highlight_color
        return self.config.default_color

    def node_size(self, node: AuthorNode) -> float:
        return node.r

    def node_label(self, node: AuthorNode) -> str:
        return node.id

    def label_font_size(self, global_scale: float) -> float:
        """
        label size stays constant on screen while zooming.
        the page script applies the same formula to label_style()["baseSize"].
        """
        return self.config.label_base_size / global_scale

    def to_props(self) -> Dict[str, Any]:
        """static renderer configuration, keyed by force-graph option name."""
        c = self.config
        return {
            "nodeId": "id",
            "nodeAutoColorBy": "group",
            "nodeCanvasObjectMode": "after",
            "nodeRelSize": c.node_rel_size,
            "linkColor": c.link_color,
            "linkCurvature": c.link_curvature,
            "linkWidth": c.link_width,
            "linkHoverPrecision": c.link_hover_precision,
            "backgroundColor": c.background_color,
            "d3AlphaDecay": c.alpha_decay,
            "d3VelocityDecay": c.velocity_decay,
            "warmupTicks": c.warmup_ticks,
            "cooldownTicks": c.cooldown_ticks,
            "enableZoomInteraction": c.enable_zoom,
            "enableNodeDrag": c.enable_drag,
            "enablePanInteraction": c.enable_pan,
        }

    def label_style(self) -> Dict[str, Any]:
        """settings for the label drawn after each node."""
        return {
            "font": self.config.label_font,
            "baseSize": self.config.label_base_size,
            "color": self.config.label_color,
        }

    def prepare(self, graph: CoAuthorGraph) -> Dict[str, Any]:
        """
        renderer-ready payload.

        node color and size are evaluated here so the page only has to read
        them back; link publications are reduced to short references.
        """
        nodes = []
        for node in graph.nodes:
            data = node.to_dict()
            data["color"] = self.node_color(node)
            data["val"] = self.node_size(node)
            data["label"] = self.node_label(node)
            nodes.append(data)

        links = []
        for link in graph.links:
            links.append({
                "source": link.source,
                "target": link.target,
                "weight": link.weight,
                "publications": [p.short_ref() for p in link.publications],
            })

        return {"nodes": nodes, "links": links}
