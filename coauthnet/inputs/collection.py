"""
collection importer - load publications from bibliography exports.
supports: JSON publication lists, BibTeX files.
"""

import json
import logging
import re
from pathlib import Path
from typing import List, Optional, Dict, Any, Iterable

import bibtexparser

from ..core.models import Author, Publication

logger = logging.getLogger("coauthnet.inputs")


def load_from_json(
    path: str,
    highlight: Optional[Iterable[str]] = None,
    limit: Optional[int] = None
) -> List[Publication]:
    """
    load publications from JSON file.

    accepts a bare list or a dict wrapping it under a common key; authors
    may be objects ({"name", "affiliation", "isHighlighted"}) or plain
    name strings.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    # handle both list and dict formats
    if isinstance(data, dict):
        for key in ['publications', 'papers', 'items', 'data']:
            if key in data:
                data = data[key]
                break

    if not isinstance(data, list):
        logger.warning(f"unexpected JSON format in {path}")
        return []

    publications = []
    for i, item in enumerate(data):
        if limit and len(publications) >= limit:
            break
        if not isinstance(item, dict):
            continue

        item = dict(item)
        authors = item.get('authors')
        if isinstance(authors, str):
            item['authors'] = [a.strip() for a in authors.split(',') if a.strip()]

        pub = Publication.from_dict(item)
        if not pub.id:
            pub.id = f"pub-{i + 1}"
        publications.append(pub)

    mark_highlighted(publications, highlight)
    logger.info(f"loaded {len(publications)} publications from {path}")
    return publications


def load_from_bibtex(
    path: str,
    highlight: Optional[Iterable[str]] = None,
    limit: Optional[int] = None
) -> List[Publication]:
    """
    load publications from a BibTeX file.
    uses bibtexparser library.
    """
    with open(path, 'r', encoding='utf-8', errors='ignore') as f:
        bib_database = bibtexparser.load(f)

    publications = []
    for entry in bib_database.entries:
        if limit and len(publications) >= limit:
            break

        title = _strip_braces(entry.get('title', ''))

        year = None
        if entry.get('year'):
            try:
                year = int(_strip_braces(entry['year']))
            except ValueError:
                pass

        # bibtex uses " and " to separate authors
        names = split_bibtex_names(entry.get('author', ''))
        affiliations = split_bibtex_names(entry.get('affiliation', ''), normalize=False)
        if len(affiliations) != len(names):
            affiliations = []

        authors = [
            Author(name=name, affiliation=affiliations[i] if affiliations else None)
            for i, name in enumerate(names)
        ]

        venue = entry.get('journal') or entry.get('booktitle') or entry.get('publisher') or ''

        doi = _strip_braces(entry.get('doi', ''))
        if doi.startswith('https://doi.org/'):
            doi = doi[16:]

        publications.append(Publication(
            id=entry.get('ID', ''),
            title=title,
            year=year,
            venue=_strip_braces(venue) or None,
            doi=doi or None,
            authors=authors,
            extra={'entry_type': entry.get('ENTRYTYPE', '').lower()}
        ))

    mark_highlighted(publications, highlight)
    logger.info(f"parsed {len(publications)} entries from {path}")
    return publications


def load_collection(
    path: str,
    highlight: Optional[Iterable[str]] = None,
    limit: Optional[int] = None
) -> List[Publication]:
    """
    auto-detect format and load publications.
    """
    path = Path(path)

    if not path.exists():
        logger.warning(f"file not found: {path}")
        return []

    ext = path.suffix.lower()

    if ext == '.json':
        return load_from_json(str(path), highlight=highlight, limit=limit)
    elif ext in ['.bib', '.bibtex']:
        return load_from_bibtex(str(path), highlight=highlight, limit=limit)
    else:
        logger.warning(f"unknown format: {ext}")
        return []


def publications_from_dicts(
    items: Iterable[Dict[str, Any]],
    highlight: Optional[Iterable[str]] = None
) -> List[Publication]:
    """build publications from already-parsed records."""
    publications = [Publication.from_dict(item) for item in items]
    mark_highlighted(publications, highlight)
    return publications


def mark_highlighted(
    publications: List[Publication],
    names: Optional[Iterable[str]]
) -> int:
    """
    set the highlight flag on every author whose name matches (case-insensitive).
    returns the number of author records flagged.
    """
    if not names:
        return 0

    wanted = {n.strip().lower() for n in names if n and n.strip()}
    flagged = 0
    for pub in publications:
        for author in pub.authors:
            if isinstance(author.name, str) and author.name.lower() in wanted:
                author.is_highlighted = True
                flagged += 1
    return flagged


_AND = re.compile(r'\s+and\s+')


def split_bibtex_names(value: str, normalize: bool = True) -> List[str]:
    """
    split an " and "-separated bibtex list, optionally flipping "Last, First".
    separators inside braces belong to the name: {Barnes and Noble} is one author.
    """
    if not value:
        return []

    value = value.strip()
    chunks = []
    depth = 0
    start = 0
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth = max(depth - 1, 0)
        elif depth == 0:
            m = _AND.match(value, i)
            if m:
                chunks.append(value[start:i])
                start = i = m.end()
                continue
        i += 1
    chunks.append(value[start:])

    parts = []
    for chunk in chunks:
        protected = chunk.startswith('{') and chunk.endswith('}')
        part = _strip_braces(chunk)
        if not part:
            continue
        if normalize and not protected:
            part = normalize_name(part)
        parts.append(part)
    return parts


def normalize_name(name: str) -> str:
    """
    "Lovelace, Ada" -> "Ada Lovelace"
    "King, Jr, Martin" -> "Martin King Jr"
    """
    pieces = [p.strip() for p in name.split(',') if p.strip()]
    if len(pieces) == 2:
        name = f"{pieces[1]} {pieces[0]}"
    elif len(pieces) == 3:
        name = f"{pieces[2]} {pieces[0]} {pieces[1]}"
    return ' '.join(name.split())


# helpers

def _strip_braces(value: str) -> str:
    return ' '.join(value.replace('{', '').replace('}', '').split())
