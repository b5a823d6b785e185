"""Pydantic models for range-map import results.

Every species processed by the importer yields one ``ImportOutcome``.
The ``ImportReport`` groups outcomes into successful / skipped / failed
buckets and renders the operator summary printed at the end of a run.

A document that converts to zero features is reported as *failed*: the
converter treats an empty result as valid, so surfacing it is the
importer's job.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class ImportStatus(enum.Enum):
    SUCCESSFUL = "successful"
    SKIPPED = "skipped"
    FAILED = "failed"


class ImportAction(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"


class ImportOutcome(BaseModel):
    """Result of importing one species folder.

    Attributes:
        slug: Species slug (also the storage folder name).
        status: Successful, skipped or failed.
        species_name: Common name of the matched species, if found.
        document_path: Storage path of the KML document, if found.
        features_count: Number of converted features (success only).
        invalid_geometries: Features shapely reports as invalid (success only).
        action: Whether the range map was created or updated (success only).
        reason: Human-readable skip/failure reason.
        error: Structured error payload from ``RangeMapError.to_error_dict()``.
    """

    slug: str
    status: ImportStatus
    species_name: str = ""
    document_path: str = ""
    features_count: int = 0
    invalid_geometries: int = 0
    action: ImportAction | None = None
    reason: str = ""
    error: dict[str, object] | None = None


class ImportReport(BaseModel):
    """Aggregated outcomes of an import run."""

    outcomes: list[ImportOutcome] = Field(default_factory=list)

    def add(self, outcome: ImportOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def successful(self) -> list[ImportOutcome]:
        return [o for o in self.outcomes if o.status is ImportStatus.SUCCESSFUL]

    @property
    def skipped(self) -> list[ImportOutcome]:
        return [o for o in self.outcomes if o.status is ImportStatus.SKIPPED]

    @property
    def failed(self) -> list[ImportOutcome]:
        return [o for o in self.outcomes if o.status is ImportStatus.FAILED]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def summary(self) -> str:
        """Render the operator-facing summary of the run."""
        lines = ["========== IMPORT SUMMARY =========="]

        if self.successful:
            lines.append(f"Successfully imported: {len(self.successful)}")
            for item in self.successful:
                action = item.action.value if item.action else "stored"
                lines.append(
                    f"   - {item.slug}: {item.species_name} "
                    f"({item.features_count} features, {action})"
                )

        if self.skipped:
            lines.append(f"Skipped: {len(self.skipped)}")
            lines.extend(f"   - {item.slug}: {item.reason}" for item in self.skipped)

        if self.failed:
            lines.append(f"Failed: {len(self.failed)}")
            lines.extend(f"   - {item.slug}: {item.reason}" for item in self.failed)

        if not self.outcomes:
            lines.append("Nothing to import.")

        lines.append("====================================")
        return "\n".join(lines)

    def to_json(self, *, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)
