"""
html renderer - generates standalone HTML visualizations.

hands the co-authorship graph to the force-graph library (CDN loaded),
which owns physics, canvas drawing and zoom/pan/drag.

usage:
    from coauthnet.visualization import GraphBuilder, HTMLRenderer

    graph = GraphBuilder().build(publications)

    renderer = HTMLRenderer()
    renderer.render(graph, "people.html", title="Co-authors")
"""

import html
import json
import logging
from typing import Optional, Any

from ..core.config import RenderConfig
from ..core.models import CoAuthorGraph
from .render_adapter import RenderAdapter

logger = logging.getLogger("coauthnet.visualization")


PAGE_TEMPLATE = '''<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            margin: 0;
            padding: 20px;
            background: #f8f9fa;
            color: #2c3e50;
        }}
        #header h1 {{
            margin: 0 0 10px 0;
            font-family: Georgia, serif;
        }}
        #header p {{
            margin: 0 0 15px 0;
            color: #555;
            max-width: 42rem;
        }}
        #stats {{
            font-size: 14px;
            opacity: 0.8;
            margin-bottom: 10px;
        }}
        #graph {{
            width: 100%;
            height: {height};
            min-height: {min_height};
            background: white;
            border: 1px solid #ddd;
            border-radius: 12px;
            box-sizing: border-box;
        }}
        .placeholder {{
            display: flex;
            align-items: center;
            justify-content: center;
            height: 100%;
            color: #6b7280;
            font-size: 18px;
        }}
    </style>
</head>
<body>
    <div id="header">
        <h1>{title}</h1>
        {description}
        <div id="stats">{node_count} authors, {link_count} co-authorships</div>
    </div>
    <div id="graph">{body}</div>
    {script}
</body>
</html>'''


PLACEHOLDER = '<div class="placeholder"><p>{message}</p></div>'


SCRIPT_TEMPLATE = '''<script src="{script_url}"></script>
    <script>
    const graphData = {graph_data};
    const props = {props};
    const labelStyle = {label_style};

    const container = document.getElementById('graph');

    ForceGraph()(container)
        .width(container.clientWidth)
        .height(container.clientHeight)
        .graphData(graphData)
        .nodeId(props.nodeId)
        .nodeAutoColorBy(props.nodeAutoColorBy)
        .nodeColor(node => node.color)
        .nodeVal(node => node.val)
        .nodeRelSize(props.nodeRelSize)
        .nodeCanvasObjectMode(() => props.nodeCanvasObjectMode)
        .nodeCanvasObject((node, ctx, globalScale) => {{
            const label = node.label || node.id;
            const fontSize = labelStyle.baseSize / globalScale;
            ctx.font = `${{fontSize}}px ${{labelStyle.font}}`;
            ctx.textAlign = 'center';
            ctx.textBaseline = 'top';
            ctx.fillStyle = labelStyle.color;
            ctx.fillText(label, node.x, node.y);
        }})
        .linkColor(() => props.linkColor)
        .linkCurvature(props.linkCurvature)
        .linkWidth(props.linkWidth)
        .linkHoverPrecision(props.linkHoverPrecision)
        .linkLabel(link => `${{link.weight}} shared publication(s)`)
        .backgroundColor(props.backgroundColor)
        .d3AlphaDecay(props.d3AlphaDecay)
        .d3VelocityDecay(props.d3VelocityDecay)
        .warmupTicks(props.warmupTicks)
        .cooldownTicks(props.cooldownTicks)
        .enableZoomInteraction(props.enableZoomInteraction)
        .enableNodeDrag(props.enableNodeDrag)
        .enablePanInteraction(props.enablePanInteraction);
    </script>'''


def _script_json(value: Any) -> str:
    """json for embedding inside a <script> element."""
    return json.dumps(value).replace("</", "<\\/")


class HTMLRenderer:
    """renders the co-authorship graph as a standalone force-graph page."""

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        adapter: Optional[RenderAdapter] = None
    ):
        self.config = config or (adapter.config if adapter else RenderConfig())
        self.adapter = adapter or RenderAdapter(self.config)

    def render_html(
        self,
        graph: CoAuthorGraph,
        title: str = "Co-authorship Network",
        description: Optional[str] = None
    ) -> str:
        """
        build the page.

        an empty graph gets the placeholder instead of the renderer.
        """
        description_html = f"<p>{html.escape(description)}</p>" if description else ""

        if graph.is_empty:
            body = PLACEHOLDER.format(message=html.escape(self.config.empty_message))
            script = ""
        else:
            body = ""
            script = SCRIPT_TEMPLATE.format(
                script_url=html.escape(self.config.script_url, quote=True),
                graph_data=_script_json(self.adapter.prepare(graph)),
                props=_script_json(self.adapter.to_props()),
                label_style=_script_json(self.adapter.label_style())
            )

        return PAGE_TEMPLATE.format(
            title=html.escape(title),
            description=description_html,
            height=self.config.height,
            min_height=self.config.min_height,
            node_count=len(graph.nodes),
            link_count=len(graph.links),
            body=body,
            script=script
        )

    def render(
        self,
        graph: CoAuthorGraph,
        filepath: str,
        title: str = "Co-authorship Network",
        description: Optional[str] = None
    ):
        """render graph to an HTML file."""
        page = self.render_html(graph, title=title, description=description)

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(page)
        logger.info(f"rendered co-authorship graph to {filepath}")
