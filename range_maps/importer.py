"""Batch import of species range maps.

For each species folder in the document source:

1. Resolve the species by slug (skip if unknown).
2. Find the folder's KML document (skip if none).
3. Download and convert it with ``convert_kml``.
4. Treat an empty conversion as a failure. The converter never raises
   for malformed content, so this is where it gets surfaced.
5. Upsert the GeoJSON keyed by species id and record created/updated.

One failing species never stops the run; every outcome lands in the
``ImportReport``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from range_maps.convert import convert_kml, explain_invalid_features
from range_maps.core.constants import DEFAULT_PROVENANCE
from range_maps.core.exceptions import ContractError, EmptyRangeMapError, RangeMapError
from range_maps.models.report import ImportOutcome, ImportReport, ImportStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from range_maps.storage import DocumentSource, RangeMapStore

logger = logging.getLogger("range_maps.importer")


# ---------------------------------------------------------------------------
# Species lookup
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SpeciesRecord:
    """The entity a range map belongs to."""

    id: str
    slug: str
    common_name: str = ""
    scientific_name: str = ""


class SpeciesLookup(Protocol):
    def find(self, slug: str) -> SpeciesRecord | None: ...


class MappingSpeciesLookup:
    """In-memory species lookup keyed by slug."""

    def __init__(self, records: Iterable[SpeciesRecord]) -> None:
        self._by_slug = {record.slug: record for record in records}

    def find(self, slug: str) -> SpeciesRecord | None:
        return self._by_slug.get(slug)

    def __len__(self) -> int:
        return len(self._by_slug)


class SlugSpeciesLookup:
    """Resolves every slug to a species whose id and name are the slug."""

    def find(self, slug: str) -> SpeciesRecord | None:
        return SpeciesRecord(id=slug, slug=slug, common_name=slug)


def load_species_file(path: Path | str) -> MappingSpeciesLookup:
    """Load species records from a JSON array.

    Each object needs ``id`` and ``slug``; ``species_common_name`` and
    ``species_scientific_name`` are optional.

    Raises:
        ContractError: If the file is unreadable, not a JSON array, or an
            entry lacks ``id``/``slug``.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        msg = f"Cannot load species file {path}: {exc}"
        raise ContractError(msg, stage="species", code="SPECIES_FILE_INVALID") from exc

    if not isinstance(data, list):
        msg = f"Species file {path} must contain a JSON array, got {type(data).__name__}"
        raise ContractError(msg, stage="species", code="SPECIES_FILE_INVALID")

    records: list[SpeciesRecord] = []
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict) or not entry.get("id") or not entry.get("slug"):
            msg = f"Species entry {idx} in {path} must be an object with 'id' and 'slug'"
            raise ContractError(msg, stage="species", code="SPECIES_FILE_INVALID")
        records.append(
            SpeciesRecord(
                id=str(entry["id"]),
                slug=str(entry["slug"]),
                common_name=str(entry.get("species_common_name") or ""),
                scientific_name=str(entry.get("species_scientific_name") or ""),
            )
        )
    return MappingSpeciesLookup(records)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def import_species_range_map(
    slug: str,
    *,
    documents: DocumentSource,
    species: SpeciesLookup,
    store: RangeMapStore,
    source: str = DEFAULT_PROVENANCE,
) -> ImportOutcome:
    """Import the range map of one species folder.

    Storage and persistence errors (``RangeMapError``) are captured in
    the returned outcome; anything else propagates.
    """
    logger.info("Processing species | slug=%s", slug)

    record = species.find(slug)
    if record is None:
        logger.warning("Species not found | slug=%s", slug)
        return ImportOutcome(
            slug=slug,
            status=ImportStatus.SKIPPED,
            reason="Species not found in database",
        )

    try:
        document_path = documents.find_document(slug)
        if document_path is None:
            logger.warning("No KML file in storage | slug=%s", slug)
            return ImportOutcome(
                slug=slug,
                status=ImportStatus.SKIPPED,
                species_name=record.common_name,
                reason="No KML file in storage",
            )

        logger.info("Found KML file | slug=%s | path=%s", slug, document_path)
        collection = convert_kml(documents.download_text(document_path), source=source)

        if collection.is_empty:
            msg = f"Failed to parse KML or no features found: {document_path}"
            raise EmptyRangeMapError(msg, correlation_id=slug)

        problems = explain_invalid_features(collection)
        for idx, reason in problems:
            logger.warning(
                "Invalid geometry | slug=%s | feature=%d | reason=%s", slug, idx, reason
            )

        action = store.upsert(record.id, collection, source=source)

    except RangeMapError as exc:
        logger.warning("Import failed | slug=%s | code=%s | %s", slug, exc.code, exc.message)
        return ImportOutcome(
            slug=slug,
            status=ImportStatus.FAILED,
            species_name=record.common_name,
            reason=exc.message,
            error=exc.to_error_dict(),
        )

    logger.info(
        "Imported range map | slug=%s | features=%d | action=%s",
        slug,
        len(collection.features),
        action.value,
    )
    return ImportOutcome(
        slug=slug,
        status=ImportStatus.SUCCESSFUL,
        species_name=record.common_name,
        document_path=document_path,
        features_count=len(collection.features),
        invalid_geometries=len(problems),
        action=action,
    )


def import_all_range_maps(
    *,
    documents: DocumentSource,
    species: SpeciesLookup,
    store: RangeMapStore,
    source: str = DEFAULT_PROVENANCE,
    slugs: Iterable[str] | None = None,
) -> ImportReport:
    """Import every species folder (or just *slugs*) into a report.

    Raises:
        SourceError: If the folder listing itself fails.
    """
    if slugs is None:
        folder_list = documents.list_folders()
        logger.info("Found %d folder(s) in storage", len(folder_list))
    else:
        folder_list = list(slugs)

    report = ImportReport()
    for slug in folder_list:
        report.add(
            import_species_range_map(
                slug,
                documents=documents,
                species=species,
                store=store,
                source=source,
            )
        )

    logger.info(
        "Import finished | successful=%d | skipped=%d | failed=%d",
        len(report.successful),
        len(report.skipped),
        len(report.failed),
    )
    return report
