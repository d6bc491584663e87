"""
coauthnet CLI - build and render co-authorship networks.
"""

import argparse
import logging
import sys
from pathlib import Path

from .core.config import CoauthnetConfig
from .core.logs import setup_logging
from .inputs.collection import load_collection
from .visualization.graph_builder import GraphBuilder
from .visualization.exporter import GraphExporter
from .visualization.html_renderer import HTMLRenderer

logger = logging.getLogger("coauthnet.cli")


FORMATS = ["html", "json", "graphml", "gexf"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coauthnet",
        description="Co-authorship network builder.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  coauthnet publications.json
  coauthnet my_library.bib --highlight "Ada Lovelace" -o people.html
  coauthnet my_library.bib --format graphml -o people.graphml
        """
    )

    parser.add_argument(
        "input",
        help="publication list (.json) or BibTeX file (.bib)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=FORMATS,
        default=None,
        help="output format (default: html)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        metavar="FILE",
        help="output file (default: <input stem>.<format> in the output dir)"
    )
    parser.add_argument(
        "--highlight",
        type=str,
        action="append",
        metavar="NAME",
        help="author name to highlight (can specify multiple)"
    )
    parser.add_argument(
        "--title",
        type=str,
        default="Co-authorship Network",
        help="page title for html output"
    )
    parser.add_argument(
        "--description",
        type=str,
        help="page description for html output"
    )
    parser.add_argument(
        "--embedded",
        action="store_true",
        help="compact html page"
    )
    parser.add_argument(
        "--min-radius",
        type=float,
        help="smallest node radius"
    )
    parser.add_argument(
        "--max-radius",
        type=float,
        help="largest node radius"
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="read at most this many publications"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="warnings only"
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # setup logging
    log_level = logging.WARNING if args.quiet else (logging.DEBUG if args.verbose else logging.INFO)
    setup_logging(level=log_level)

    config = CoauthnetConfig.embedded() if args.embedded else CoauthnetConfig.default()
    if args.min_radius is not None:
        config.graph.min_radius = args.min_radius
    if args.max_radius is not None:
        config.graph.max_radius = args.max_radius
    if config.graph.min_radius > config.graph.max_radius:
        parser.error("--min-radius must not exceed --max-radius")

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"input not found: {input_path}")
        return 1

    publications = load_collection(str(input_path), highlight=args.highlight, limit=args.limit)
    graph = GraphBuilder(config.graph).build(publications)

    fmt = args.format or config.export.default_format
    if args.output:
        output = Path(args.output)
    else:
        output = Path(config.export.output_dir) / f"{input_path.stem}.{fmt}"
    output.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "html":
        HTMLRenderer(config.render).render(
            graph, str(output), title=args.title, description=args.description
        )
    elif fmt == "json":
        GraphExporter(indent=config.export.json_indent).to_json(graph, str(output))
    elif fmt == "graphml":
        GraphExporter().to_graphml(graph, str(output))
    elif fmt == "gexf":
        GraphExporter().to_gexf(graph, str(output))

    print(f"{len(publications)} publications -> {len(graph.nodes)} authors, "
          f"{len(graph.links)} co-authorships")
    print(f"wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
