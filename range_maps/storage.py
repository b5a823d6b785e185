"""Document sources and range-map stores used by the importer.

The converter itself never touches storage. These collaborators fetch
raw KML text and persist converted GeoJSON:

- **BlobDocumentSource** / **BlobRangeMapStore**: Azure Blob Storage,
  one virtual folder of KML documents per species slug in the input
  container, one ``<species_id>.geojson`` blob per species in the
  output container.
- **LocalDocumentSource** / **LocalRangeMapStore**: the same layout on
  the local filesystem, for offline runs and tests.
"""

from __future__ import annotations

import itertools
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from range_maps.core.constants import GEOJSON_SUFFIX, KML_SUFFIX
from range_maps.core.exceptions import ContractError, SourceError, StoreError
from range_maps.models.report import ImportAction

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient, ContainerClient

    from range_maps.models.feature import FeatureCollection

logger = logging.getLogger("range_maps.storage")

GEOJSON_CONTENT_TYPE = "application/geo+json"


class DocumentSource(Protocol):
    """Where raw KML documents come from."""

    def list_folders(self) -> list[str]: ...

    def find_document(self, folder: str) -> str | None: ...

    def download_text(self, path: str) -> str: ...


class RangeMapStore(Protocol):
    """Where converted range maps go. Keyed by species id."""

    def upsert(
        self, species_id: str, collection: FeatureCollection, *, source: str
    ) -> ImportAction: ...


# ---------------------------------------------------------------------------
# Azure Blob Storage
# ---------------------------------------------------------------------------


def get_blob_service_client() -> BlobServiceClient:
    """Create a ``BlobServiceClient`` from the ``AzureWebJobsStorage`` env var.

    Raises:
        ContractError: If the environment variable is not set.
    """
    from azure.storage.blob import BlobServiceClient

    connection_string = os.environ.get("AzureWebJobsStorage", "")  # noqa: SIM112
    if not connection_string:
        msg = "AzureWebJobsStorage environment variable is not set"
        raise ContractError(msg, stage="config", code="MISSING_CONNECTION_STRING")

    return BlobServiceClient.from_connection_string(connection_string)


class BlobDocumentSource:
    """KML documents stored as ``<slug>/<file>.kml`` blobs."""

    def __init__(
        self,
        container_client: ContainerClient,
        *,
        max_folders: int = 1000,
        max_files_per_folder: int = 100,
    ) -> None:
        self._container = container_client
        self._max_folders = max_folders
        self._max_files = max_files_per_folder

    def list_folders(self) -> list[str]:
        """Return top-level virtual folder names, sorted."""
        from azure.core.exceptions import AzureError
        from azure.storage.blob import BlobPrefix

        try:
            items = self._container.walk_blobs(delimiter="/")
            folders = sorted(
                item.name.rstrip("/") for item in items if isinstance(item, BlobPrefix)
            )
        except AzureError as exc:
            msg = f"Cannot list folders in container '{self._container.container_name}': {exc}"
            raise SourceError(msg) from exc
        return folders[: self._max_folders]

    def find_document(self, folder: str) -> str | None:
        """Return the path of the first ``.kml`` blob in *folder*, if any."""
        from azure.core.exceptions import AzureError

        try:
            blobs = self._container.list_blobs(name_starts_with=f"{folder}/")
            names = [blob.name for blob in itertools.islice(blobs, self._max_files)]
        except AzureError as exc:
            msg = f"Cannot list files for '{folder}': {exc}"
            raise SourceError(msg, correlation_id=folder) from exc

        for name in names:
            if name.lower().endswith(KML_SUFFIX):
                return name
        return None

    def download_text(self, path: str) -> str:
        """Download a blob and decode it as UTF-8 text."""
        from azure.core.exceptions import AzureError

        try:
            downloader = self._container.download_blob(path)
            content = downloader.readall()
        except AzureError as exc:
            msg = f"Error downloading {path}: {exc}"
            raise SourceError(msg, correlation_id=path) from exc
        if isinstance(content, bytes):
            return content.decode("utf-8", errors="replace")
        return str(content)


class BlobRangeMapStore:
    """Range maps stored as ``<species_id>.geojson`` blobs."""

    def __init__(self, container_client: ContainerClient) -> None:
        self._container = container_client

    def upsert(self, species_id: str, collection: FeatureCollection, *, source: str) -> ImportAction:
        """Create or overwrite the species' GeoJSON blob.

        Provenance is recorded in the blob metadata; the blob body is
        the plain GeoJSON document.

        Raises:
            StoreError: If the existence check or upload fails.
        """
        from azure.core.exceptions import AzureError
        from azure.storage.blob import ContentSettings

        blob_name = f"{species_id}{GEOJSON_SUFFIX}"
        try:
            blob_client = self._container.get_blob_client(blob_name)
            existed = blob_client.exists()
            blob_client.upload_blob(
                collection.to_json().encode("utf-8"),
                overwrite=True,
                metadata={"source": source, "species_id": species_id},
                content_settings=ContentSettings(content_type=GEOJSON_CONTENT_TYPE),
            )
        except AzureError as exc:
            msg = f"Failed to store range map {blob_name}: {exc}"
            raise StoreError(msg, correlation_id=species_id) from exc

        action = ImportAction.UPDATED if existed else ImportAction.CREATED
        logger.debug("Stored range map | blob=%s | action=%s", blob_name, action.value)
        return action


# ---------------------------------------------------------------------------
# Local filesystem
# ---------------------------------------------------------------------------


class LocalDocumentSource:
    """KML documents stored as ``<root>/<slug>/<file>.kml``."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    def list_folders(self) -> list[str]:
        try:
            return sorted(p.name for p in self._root.iterdir() if p.is_dir())
        except OSError as exc:
            msg = f"Cannot list folders in {self._root}: {exc}"
            raise SourceError(msg) from exc

    def find_document(self, folder: str) -> str | None:
        folder_path = self._root / folder
        if not folder_path.is_dir():
            return None
        for path in sorted(folder_path.iterdir()):
            if path.is_file() and path.name.lower().endswith(KML_SUFFIX):
                return f"{folder}/{path.name}"
        return None

    def download_text(self, path: str) -> str:
        try:
            return (self._root / path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            msg = f"Error reading {path}: {exc}"
            raise SourceError(msg, correlation_id=path) from exc


class LocalRangeMapStore:
    """Range maps written as ``<directory>/<species_id>.geojson`` files."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    def upsert(self, species_id: str, collection: FeatureCollection, *, source: str) -> ImportAction:
        path = self._directory / f"{species_id}{GEOJSON_SUFFIX}"
        existed = path.exists()
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_text(collection.to_json(indent=2), encoding="utf-8")
        except OSError as exc:
            msg = f"Failed to write range map {path}: {exc}"
            raise StoreError(msg, correlation_id=species_id) from exc
        return ImportAction.UPDATED if existed else ImportAction.CREATED
