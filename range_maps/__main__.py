"""Command-line entry point: ``python -m range_maps``.

Imports one species (``SLUG``) or every species folder from the input
blob container, or from a local directory tree with ``--local``.
``--dump FILE`` converts a single local KML file and prints the GeoJSON.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from range_maps.convert import convert_kml
from range_maps.core.config import ImportConfig
from range_maps.core.exceptions import RangeMapError
from range_maps.importer import SlugSpeciesLookup, import_all_range_maps, load_species_file
from range_maps.storage import (
    BlobDocumentSource,
    BlobRangeMapStore,
    LocalDocumentSource,
    LocalRangeMapStore,
    get_blob_service_client,
)

logger = logging.getLogger("range_maps.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="range_maps",
        description="Import KML species range maps as GeoJSON.",
    )
    parser.add_argument("slug", nargs="?", help="Species slug to import (default: all folders)")
    parser.add_argument(
        "--species-file",
        type=Path,
        help="JSON array of species records (id, slug, species_common_name); "
        "without it every slug maps to itself",
    )
    parser.add_argument(
        "--local",
        type=Path,
        metavar="DIR",
        help="Read KML documents from DIR/<slug>/*.kml instead of blob storage",
    )
    parser.add_argument(
        "--output",
        type=Path,
        metavar="DIR",
        help="With --local: write <species_id>.geojson files into DIR (default: DIR/geojson)",
    )
    parser.add_argument(
        "--dump",
        type=Path,
        metavar="FILE",
        help="Convert a single KML file and print the GeoJSON to stdout",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent for --dump")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.output is not None and args.local is None:
        parser.error("--output requires --local")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ImportConfig.from_env()

        if args.dump is not None:
            return _dump(args.dump, source=config.source, indent=args.indent)

        species = (
            load_species_file(args.species_file)
            if args.species_file is not None
            else SlugSpeciesLookup()
        )

        if args.local is not None:
            documents = LocalDocumentSource(args.local)
            store = LocalRangeMapStore(args.output or args.local / "geojson")
        else:
            service = get_blob_service_client()
            documents = BlobDocumentSource(
                service.get_container_client(config.input_container),
                max_folders=config.max_folders,
                max_files_per_folder=config.max_files_per_folder,
            )
            store = BlobRangeMapStore(service.get_container_client(config.output_container))

        logger.info(
            "Range map import | input=%s | source=%s",
            args.local or config.input_container,
            config.source,
        )
        report = import_all_range_maps(
            documents=documents,
            species=species,
            store=store,
            source=config.source,
            slugs=[args.slug] if args.slug else None,
        )
    except RangeMapError as exc:
        logger.error("Import aborted | code=%s | %s", exc.code, exc.message)
        return 1

    print(report.summary())
    return 1 if report.has_failures else 0


def _dump(path: Path, *, source: str, indent: int) -> int:
    try:
        markup = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return 1

    collection = convert_kml(markup, source=source)
    print(collection.to_json(indent=indent))
    if collection.is_empty:
        logger.warning("No features found in %s", path)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
