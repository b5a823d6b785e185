"""Tests for the import report models."""

from __future__ import annotations

import json

from range_maps.models.report import ImportAction, ImportOutcome, ImportReport, ImportStatus


def _make_report() -> ImportReport:
    report = ImportReport()
    report.add(
        ImportOutcome(
            slug="chelonia-mydas",
            status=ImportStatus.SUCCESSFUL,
            species_name="Green Sea Turtle",
            features_count=3,
            action=ImportAction.CREATED,
        )
    )
    report.add(
        ImportOutcome(slug="unknown-turtle", status=ImportStatus.SKIPPED, reason="Species not found in database")
    )
    report.add(
        ImportOutcome(
            slug="caretta-caretta",
            status=ImportStatus.FAILED,
            reason="Failed to parse KML or no features found: caretta-caretta/range.kml",
        )
    )
    return report


class TestImportReportBuckets:
    """Outcomes are grouped by status."""

    def test_buckets(self) -> None:
        report = _make_report()
        assert [o.slug for o in report.successful] == ["chelonia-mydas"]
        assert [o.slug for o in report.skipped] == ["unknown-turtle"]
        assert [o.slug for o in report.failed] == ["caretta-caretta"]
        assert report.has_failures

    def test_no_failures(self) -> None:
        report = ImportReport()
        report.add(ImportOutcome(slug="a", status=ImportStatus.SKIPPED, reason="x"))
        assert not report.has_failures


class TestImportReportSummary:
    """Operator-facing summary text."""

    def test_summary_lists_every_bucket(self) -> None:
        summary = _make_report().summary()
        assert "Successfully imported: 1" in summary
        assert "chelonia-mydas: Green Sea Turtle (3 features, created)" in summary
        assert "Skipped: 1" in summary
        assert "unknown-turtle: Species not found in database" in summary
        assert "Failed: 1" in summary

    def test_empty_summary(self) -> None:
        assert "Nothing to import." in ImportReport().summary()

    def test_json_serialisation(self) -> None:
        parsed = json.loads(_make_report().to_json())
        assert len(parsed["outcomes"]) == 3
        assert parsed["outcomes"][0]["status"] == "successful"
        assert parsed["outcomes"][0]["action"] == "created"
        assert parsed["outcomes"][1]["action"] is None
