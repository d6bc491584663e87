from .collection import (
    load_collection, load_from_json, load_from_bibtex,
    publications_from_dicts, mark_highlighted
)
