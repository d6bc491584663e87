#!/usr/bin/env python3
"""
test co-authorship graph construction.

run with: pytest test_graph_builder.py -v
"""

import pytest

from coauthnet.core.config import GraphConfig
from coauthnet.core.models import Author, Publication
from coauthnet.visualization.graph_builder import (
    GraphBuilder, GraphCache, build_graph, pair_key, scale_radius, to_networkx,
    MIN_NODE_RADIUS, MAX_NODE_RADIUS
)


def pub(pub_id, *names, **kwargs):
    """publication with plain authors."""
    return Publication(id=pub_id, title=f"Paper {pub_id}", authors=[Author(n) for n in names], **kwargs)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def abc_publications():
    """A appears three times, B twice, C once."""
    return [
        pub("p1", "A", "B"),
        pub("p2", "A", "C"),
        pub("p3", "A", "B"),
    ]


@pytest.fixture
def lab_publications():
    """a small lab with a highlighted PI and inconsistent affiliations."""
    return [
        Publication(id="p1", authors=[
            Author("Grace Hopper", affiliation="Yale", is_highlighted=True),
            Author("Alan Turing", affiliation="Cambridge"),
            Author("Ada Lovelace"),
        ]),
        Publication(id="p2", authors=[
            Author("Alan Turing", affiliation="Manchester"),
            Author("Grace Hopper", affiliation="Navy"),
        ]),
        Publication(id="p3", authors=[
            Author("Ada Lovelace", affiliation="London", is_highlighted=True),
            Author("Charles Babbage", affiliation="Cambridge"),
        ]),
        Publication(id="p4", authors=[
            Author("Charles Babbage"),
        ]),
    ]


# =============================================================================
# Scenario
# =============================================================================

class TestScenario:
    """the A/B/C scenario."""

    def test_nodes(self, abc_publications):
        graph = build_graph(abc_publications)

        assert [n.id for n in graph.nodes] == ["A", "B", "C"]
        assert graph.node("A").publications_count == 3
        assert graph.node("B").publications_count == 2
        assert graph.node("C").publications_count == 1

    def test_radii(self, abc_publications):
        graph = build_graph(abc_publications)

        assert graph.node("A").r == pytest.approx(8.0)
        assert graph.node("B").r == pytest.approx(5.0)
        assert graph.node("C").r == pytest.approx(2.0)

    def test_links(self, abc_publications):
        graph = build_graph(abc_publications)

        assert len(graph.links) == 2
        ab = graph.link("A", "B")
        ac = graph.link("C", "A")
        assert ab.weight == 2
        assert [p.id for p in ab.publications] == ["p1", "p3"]
        assert ac.weight == 1
        assert graph.link("B", "C") is None


# =============================================================================
# Aggregation Rules
# =============================================================================

class TestAuthorAggregation:
    """test node aggregation rules."""

    def test_one_node_per_name(self, lab_publications):
        graph = build_graph(lab_publications)
        names = [n.id for n in graph.nodes]
        assert len(names) == len(set(names)) == 4

    def test_first_seen_order(self, lab_publications):
        graph = build_graph(lab_publications)
        assert [n.id for n in graph.nodes] == [
            "Grace Hopper", "Alan Turing", "Ada Lovelace", "Charles Babbage"
        ]

    def test_count_sum_matches_author_occurrences(self, lab_publications):
        graph = build_graph(lab_publications)
        total = sum(len(p.authors) for p in lab_publications)
        assert sum(n.publications_count for n in graph.nodes) == total

    def test_affiliation_first_seen_wins(self, lab_publications):
        """later affiliations never overwrite the first one."""
        graph = build_graph(lab_publications)
        assert graph.node("Alan Turing").group == "Cambridge"
        assert graph.node("Grace Hopper").group == "Yale"

    def test_missing_first_affiliation_stays_unknown(self, lab_publications):
        """Ada is first seen without affiliation; a later one is ignored."""
        graph = build_graph(lab_publications)
        assert graph.node("Ada Lovelace").group == "Unknown"

    def test_unknown_group_configurable(self):
        graph = GraphBuilder(GraphConfig(unknown_group="n/a")).build([pub("p1", "X")])
        assert graph.node("X").group == "n/a"

    def test_highlight_is_monotonic_or(self, lab_publications):
        """a single highlighted appearance marks the node for good."""
        graph = build_graph(lab_publications)
        assert graph.node("Grace Hopper").is_highlighted
        assert graph.node("Ada Lovelace").is_highlighted
        assert not graph.node("Alan Turing").is_highlighted
        assert not graph.node("Charles Babbage").is_highlighted

    def test_highlight_not_unset_by_later_records(self):
        pubs = [
            Publication(id="1", authors=[Author("X", is_highlighted=True)]),
            Publication(id="2", authors=[Author("X", is_highlighted=False)]),
        ]
        assert build_graph(pubs).node("X").is_highlighted


class TestPairAggregation:
    """test link aggregation rules."""

    def test_canonical_order(self):
        graph = build_graph([pub("p1", "Zed", "Amy")])
        link = graph.links[0]
        assert (link.source, link.target) == ("Amy", "Zed")

    def test_pair_key(self):
        assert pair_key("b", "a") == ("a", "b")
        assert pair_key("a", "b") == ("a", "b")

    def test_reversed_order_merges(self):
        graph = build_graph([pub("p1", "A", "B"), pub("p2", "B", "A")])
        assert len(graph.links) == 1
        assert graph.links[0].weight == 2

    def test_all_pairs_in_publication(self):
        graph = build_graph([pub("p1", "A", "B", "C", "D")])
        assert len(graph.links) == 6
        assert all(l.weight == 1 for l in graph.links)

    def test_no_self_links(self, lab_publications):
        graph = build_graph(lab_publications)
        assert all(l.source != l.target for l in graph.links)

    def test_weight_equals_shared_publications(self, lab_publications):
        graph = build_graph(lab_publications)
        for link in graph.links:
            shared = [
                p for p in lab_publications
                if link.source in {a.name for a in p.authors}
                and link.target in {a.name for a in p.authors}
            ]
            assert link.weight == len(shared) == len(link.publications)

    def test_no_link_without_coauthorship(self, lab_publications):
        graph = build_graph(lab_publications)
        assert graph.link("Grace Hopper", "Charles Babbage") is None

    def test_names_with_separator_characters(self):
        """names containing dashes never collide."""
        graph = build_graph([pub("p1", "A---B", "C"), pub("p2", "A", "B---C")])
        assert len(graph.links) == 2
        assert graph.link("A---B", "C").weight == 1
        assert graph.link("A", "B---C").weight == 1

    def test_solo_publication_has_no_links(self):
        graph = build_graph([pub("p1", "Solo")])
        assert len(graph.nodes) == 1
        assert graph.links == []


# =============================================================================
# Radius Scaling
# =============================================================================

class TestRadius:
    """test radius derivation."""

    def test_bounds(self, lab_publications):
        graph = build_graph(lab_publications)
        for node in graph.nodes:
            assert MIN_NODE_RADIUS <= node.r <= MAX_NODE_RADIUS

    def test_monotonic(self):
        pubs = [pub(str(i), "Top", *(["Mid"] if i < 3 else []), *(["Low"] if i == 0 else []))
                for i in range(5)]
        graph = build_graph(pubs)
        assert graph.node("Low").r < graph.node("Mid").r < graph.node("Top").r
        assert graph.node("Top").r == pytest.approx(MAX_NODE_RADIUS)

    def test_single_author(self):
        graph = build_graph([pub("p1", "A")])
        assert graph.node("A").r == MIN_NODE_RADIUS

    def test_equal_counts_get_min_radius(self):
        pubs = [pub("p1", "A", "B"), pub("p2", "A", "B")]
        graph = build_graph(pubs)
        assert [n.r for n in graph.nodes] == [MIN_NODE_RADIUS, MIN_NODE_RADIUS]

    def test_scale_radius(self):
        assert scale_radius(1, 1) == 2.0
        assert scale_radius(3, 3) == 8.0
        assert scale_radius(2, 3) == 5.0
        assert scale_radius(1, 0) == 2.0

    def test_custom_range(self):
        config = GraphConfig(min_radius=1.0, max_radius=11.0)
        graph = GraphBuilder(config).build([pub("p1", "A", "B"), pub("p2", "A")])
        assert graph.node("A").r == pytest.approx(11.0)
        assert graph.node("B").r == pytest.approx(1.0)


# =============================================================================
# Edge Cases
# =============================================================================

class TestEdgeCases:
    """test empty and malformed input."""

    def test_empty_input(self):
        assert build_graph([]).to_dict() == {"nodes": [], "links": []}

    def test_none_input(self):
        graph = build_graph(None)
        assert graph.is_empty
        assert graph.links == []

    def test_publication_without_authors_skipped(self):
        graph = build_graph([Publication(id="p0"), pub("p1", "A", "B")])
        assert len(graph.nodes) == 2
        assert len(graph.links) == 1

    def test_nameless_authors_skipped(self):
        pubs = [Publication(id="p1", authors=[Author(""), Author("A"), Author(None), Author("B")])]
        graph = build_graph(pubs)
        assert [n.id for n in graph.nodes] == ["A", "B"]
        assert graph.link("A", "B").weight == 1

    def test_duplicate_name_counts_once(self):
        graph = build_graph([pub("p1", "A", "A", "B")])
        assert graph.node("A").publications_count == 1
        assert len(graph.links) == 1
        assert graph.links[0].weight == 1


# =============================================================================
# Idempotence & Caching
# =============================================================================

class TestIdempotence:
    """test rebuilding and memoization."""

    def _shape(self, graph):
        nodes = {(n.id, n.group, n.publications_count, n.is_highlighted, n.r) for n in graph.nodes}
        links = {(l.source, l.target, l.weight) for l in graph.links}
        return nodes, links

    def test_rebuild_is_equivalent(self, lab_publications):
        builder = GraphBuilder()
        assert self._shape(builder.build(lab_publications)) == self._shape(builder.build(lab_publications))

    def test_input_not_mutated(self, abc_publications):
        before = [p.to_dict() for p in abc_publications]
        build_graph(abc_publications)
        assert [p.to_dict() for p in abc_publications] == before

    def test_cache_reuses_same_input(self, abc_publications):
        cache = GraphCache()
        first = cache.get(abc_publications)
        second = cache.get(abc_publications)
        assert first is second
        assert cache.builds == 1

    def test_cache_rebuilds_on_new_input(self, abc_publications):
        cache = GraphCache()
        first = cache.get(abc_publications)
        second = cache.get(list(abc_publications))
        assert first is not second
        assert cache.builds == 2
        assert self._shape(first) == self._shape(second)

    def test_cache_clear(self, abc_publications):
        cache = GraphCache()
        cache.get(abc_publications)
        cache.clear()
        cache.get(abc_publications)
        assert cache.builds == 2


# =============================================================================
# Payload & NetworkX
# =============================================================================

class TestPayload:
    """test the renderer payload shape."""

    def test_wire_keys(self, abc_publications):
        data = build_graph(abc_publications).to_dict()
        assert set(data["nodes"][0]) == {"id", "group", "publicationsCount", "isHighlighted", "r"}
        assert set(data["links"][0]) == {"source", "target", "weight", "publications"}
        assert data["links"][0]["publications"][0]["id"] == "p1"

    def test_to_networkx(self, abc_publications):
        G = to_networkx(build_graph(abc_publications))
        assert G.number_of_nodes() == 3
        assert G.number_of_edges() == 2
        assert G["A"]["B"]["weight"] == 2
        assert G["B"]["A"]["publications"] == ["p1", "p3"]
        assert G.nodes["A"]["publications_count"] == 3
