"""
graph exporter - exports the co-authorship graph to various formats.

supports:
- JSON (the renderer payload)
- GraphML (for Gephi, Cytoscape)
- GEXF (for Gephi)

usage:
    from coauthnet.visualization import GraphBuilder, GraphExporter

    graph = GraphBuilder().build(publications)

    exporter = GraphExporter()
    exporter.to_json(graph, "people.json")
    exporter.to_graphml(graph, "people.graphml")
"""

import json
import logging
from typing import Dict, Any, Optional

import networkx as nx

from ..core.models import CoAuthorGraph
from .graph_builder import to_networkx

logger = logging.getLogger("coauthnet.visualization")


class GraphExporter:
    """exports co-authorship graphs to various formats."""

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def to_json(
        self,
        graph: CoAuthorGraph,
        filepath: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        export graph to the renderer payload.

        format:
        {
            "nodes": [{"id": "...", "group": "...", "publicationsCount": 1, "isHighlighted": false, "r": 2.0}],
            "links": [{"source": "...", "target": "...", "weight": 1, "publications": [...]}],
            "metadata": {"node_count": N, "link_count": M}
        }
        """
        result = graph.to_dict()
        result["metadata"] = {
            "node_count": len(graph.nodes),
            "link_count": len(graph.links),
        }

        if filepath:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(result, f, indent=self.indent)
            logger.info(f"exported JSON to {filepath}")

        return result

    def to_graphml(self, graph: CoAuthorGraph, filepath: str):
        """
        export graph to GraphML format (for Gephi, Cytoscape).
        """
        G = self._flatten(to_networkx(graph))
        nx.write_graphml(G, filepath)
        logger.info(f"exported GraphML to {filepath}")

    def to_gexf(self, graph: CoAuthorGraph, filepath: str):
        """
        export graph to GEXF format (for Gephi).
        """
        G = self._flatten(to_networkx(graph))
        for node_id in G.nodes():
            for key, value in list(G.nodes[node_id].items()):
                if isinstance(value, bool):
                    G.nodes[node_id][key] = str(value).lower()

        nx.write_gexf(G, filepath)
        logger.info(f"exported GEXF to {filepath}")

    def _flatten(self, G: nx.Graph) -> nx.Graph:
        """json-encode list and dict attributes, which graph files cannot hold."""
        for node_id in G.nodes():
            for key, value in list(G.nodes[node_id].items()):
                if isinstance(value, (list, dict)):
                    G.nodes[node_id][key] = json.dumps(value)

        for u, v in G.edges():
            for key, value in list(G.edges[u, v].items()):
                if isinstance(value, (list, dict)):
                    G.edges[u, v][key] = json.dumps(value)

        return G
