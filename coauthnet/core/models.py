"""
core data models for coauthnet.
publication records in, co-authorship graph out.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Tuple

logger = logging.getLogger("coauthnet.core")


UNKNOWN_GROUP = "Unknown"


@dataclass
class Author:
    """an author as listed on one publication."""
    name: str
    affiliation: Optional[str] = None
    is_highlighted: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> 'Author':
        """accept either a plain name string or a mapping."""
        if isinstance(data, str):
            return cls(name=data.strip())
        name = data.get("name")
        if isinstance(name, str):
            name = name.strip()
        highlighted = data.get("isHighlighted", data.get("is_highlighted", False))
        return cls(
            name=name,
            affiliation=data.get("affiliation") or None,
            is_highlighted=bool(highlighted),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "affiliation": self.affiliation,
            "isHighlighted": self.is_highlighted,
        }


@dataclass
class Publication:
    """
    a publication record.
    only `authors` matters to graph building; the rest is carried along
    so links can point back at the papers behind them.
    """
    id: str = ""
    title: str = ""
    year: Optional[int] = None
    venue: Optional[str] = None
    doi: Optional[str] = None
    authors: List[Author] = field(default_factory=list)

    # fields the graph ignores
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN = ("id", "title", "year", "venue", "doi", "authors")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Publication':
        year = data.get("year")
        if year is not None:
            try:
                year = int(year)
            except (ValueError, TypeError):
                year = None

        raw_authors = data.get("authors")
        if not isinstance(raw_authors, (list, tuple)):
            raw_authors = []

        authors = []
        for a in raw_authors:
            if not isinstance(a, (str, dict)):
                logger.debug(f"skipping malformed author entry: {a!r}")
                continue
            authors.append(Author.from_dict(a))

        return cls(
            id=str(data.get("id") or ""),
            title=data.get("title") or "",
            year=year,
            venue=data.get("venue") or None,
            doi=data.get("doi") or None,
            authors=authors,
            extra={k: v for k, v in data.items() if k not in cls._KNOWN},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "year": self.year,
            "venue": self.venue,
            "doi": self.doi,
            "authors": [a.to_dict() for a in self.authors],
            **self.extra,
        }

    def short_ref(self) -> Dict[str, Any]:
        """compact reference for tooltips and renderer payloads."""
        return {"id": self.id, "title": self.title, "year": self.year}


@dataclass
class AuthorNode:
    """an author in the co-authorship graph."""
    id: str
    group: str = UNKNOWN_GROUP
    publications_count: int = 0
    is_highlighted: bool = False
    r: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "group": self.group,
            "publicationsCount": self.publications_count,
            "isHighlighted": self.is_highlighted,
            "r": self.r,
        }


@dataclass
class CoAuthorLink:
    """
    an undirected co-authorship edge.
    source is always the lexicographically smaller name.
    """
    source: str
    target: str
    weight: int = 0
    publications: List[Publication] = field(default_factory=list)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "publications": [p.to_dict() for p in self.publications],
        }


@dataclass
class CoAuthorGraph:
    """graph payload handed to the renderer."""
    nodes: List[AuthorNode] = field(default_factory=list)
    links: List[CoAuthorLink] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, name: str) -> Optional[AuthorNode]:
        for n in self.nodes:
            if n.id == name:
                return n
        return None

    def link(self, a: str, b: str) -> Optional[CoAuthorLink]:
        """find the link between two authors, in either order."""
        key = (a, b) if a < b else (b, a)
        for link in self.links:
            if link.key == key:
                return link
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }
