"""
graph builder - constructs the co-authorship graph from publications.

creates:
- author nodes (one per distinct name, radius scaled by publication count)
- co-authorship links (one per author pair, weight = shared publications)

usage:
    from coauthnet.visualization import GraphBuilder

    builder = GraphBuilder()
    graph = builder.build(publications)
    print(f"nodes: {len(graph.nodes)}, links: {len(graph.links)}")
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Sequence, Tuple

import networkx as nx

from ..core.config import GraphConfig
from ..core.models import Publication, AuthorNode, CoAuthorLink, CoAuthorGraph

logger = logging.getLogger("coauthnet.visualization")


MIN_NODE_RADIUS = 2.0
MAX_NODE_RADIUS = 8.0


@dataclass
class _AuthorStats:
    """running aggregate for one author name."""
    name: str
    affiliation: Optional[str] = None
    publications_count: int = 0
    is_highlighted: bool = False


@dataclass
class _PairStats:
    """running aggregate for one author pair."""
    weight: int = 0
    publications: List[Publication] = field(default_factory=list)


def pair_key(a: str, b: str) -> Tuple[str, str]:
    """canonical key for an unordered author pair."""
    return (a, b) if a < b else (b, a)


def scale_radius(
    count: int,
    max_count: int,
    min_radius: float = MIN_NODE_RADIUS,
    max_radius: float = MAX_NODE_RADIUS
) -> float:
    """linear map of a publication count onto [min_radius, max_radius]."""
    max_count = max(1, max_count)
    scaling_factor = (max_radius - min_radius) / max(max_count - 1, 1)
    return min_radius + (count - 1) * scaling_factor


class GraphBuilder:
    """
    builds the co-authorship graph from a list of publications.

    the graph is a pure function of its input: aggregation maps live only
    for the duration of one build() call.

    usage:
        builder = GraphBuilder()
        graph = builder.build(publications)

        node = graph.node("Ada Lovelace")
        print(node.publications_count, node.r)
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig()

    def build(self, publications: Optional[Sequence[Publication]]) -> CoAuthorGraph:
        """
        build nodes and links.

        nodes: authors (group = first-seen affiliation, highlighted if any
               appearance was highlighted)
        links: co-authorship (weight = number of shared publications)
        """
        if not publications:
            return CoAuthorGraph()

        authors: Dict[str, _AuthorStats] = {}
        pairs: Dict[Tuple[str, str], _PairStats] = {}
        skipped = 0

        for pub in publications:
            if not pub.authors:
                skipped += 1
                continue

            # distinct names in this publication, first occurrence order
            names: List[str] = []
            for author in pub.authors:
                name = author.name
                if not isinstance(name, str) or not name.strip():
                    skipped += 1
                    continue

                stats = authors.get(name)
                if stats is None:
                    stats = _AuthorStats(name=name, affiliation=author.affiliation or None)
                    authors[name] = stats

                if author.is_highlighted:
                    stats.is_highlighted = True

                if name in names:
                    continue
                names.append(name)
                stats.publications_count += 1

            # count each pair of co-authors once per publication
            for i, a1 in enumerate(names):
                for a2 in names[i + 1:]:
                    key = pair_key(a1, a2)
                    pair = pairs.get(key)
                    if pair is None:
                        pair = _PairStats()
                        pairs[key] = pair
                    pair.weight += 1
                    pair.publications.append(pub)

        if skipped:
            logger.debug(f"skipped {skipped} records without usable author names")

        nodes = self._materialize_nodes(authors)
        links = [
            CoAuthorLink(
                source=source,
                target=target,
                weight=pair.weight,
                publications=pair.publications
            )
            for (source, target), pair in pairs.items()
            if pair.weight >= 1
        ]

        logger.debug(f"built graph: {len(nodes)} authors, {len(links)} co-authorships")
        return CoAuthorGraph(nodes=nodes, links=links)

    def _materialize_nodes(self, authors: Dict[str, _AuthorStats]) -> List[AuthorNode]:
        """turn author aggregates into nodes with scaled radius."""
        if not authors:
            return []

        counts = [a.publications_count for a in authors.values()]
        max_count = max(1, max(counts))
        uniform = len(set(counts)) == 1

        nodes = []
        for stats in authors.values():
            if uniform:
                r = self.config.min_radius
            else:
                r = scale_radius(
                    stats.publications_count,
                    max_count,
                    self.config.min_radius,
                    self.config.max_radius
                )
            nodes.append(AuthorNode(
                id=stats.name,
                group=stats.affiliation or self.config.unknown_group,
                publications_count=stats.publications_count,
                is_highlighted=stats.is_highlighted,
                r=r
            ))
        return nodes


class GraphCache:
    """
    memoizes one build per input object.

    the cached graph is returned only while the caller passes the very same
    sequence object; any new sequence triggers a rebuild.
    """

    def __init__(self, builder: Optional[GraphBuilder] = None):
        self.builder = builder or GraphBuilder()
        self._input: Optional[Sequence[Publication]] = None
        self._graph: Optional[CoAuthorGraph] = None
        self.builds = 0

    def get(self, publications: Optional[Sequence[Publication]]) -> CoAuthorGraph:
        if self._graph is not None and publications is self._input:
            return self._graph

        self._graph = self.builder.build(publications)
        self._input = publications
        self.builds += 1
        return self._graph

    def clear(self):
        self._input = None
        self._graph = None


def build_graph(
    publications: Optional[Sequence[Publication]],
    config: Optional[GraphConfig] = None
) -> CoAuthorGraph:
    """build a co-authorship graph with default settings."""
    return GraphBuilder(config).build(publications)


def to_networkx(graph: CoAuthorGraph) -> nx.Graph:
    """
    convert to an undirected networkx graph.

    nodes carry group, publications_count, is_highlighted and r;
    edges carry weight and the ids of the shared publications.
    """
    G = nx.Graph()

    for node in graph.nodes:
        G.add_node(
            node.id,
            group=node.group,
            publications_count=node.publications_count,
            is_highlighted=node.is_highlighted,
            r=node.r
        )

    for link in graph.links:
        G.add_edge(
            link.source,
            link.target,
            weight=link.weight,
            publications=[p.id or p.title for p in link.publications]
        )

    return G
