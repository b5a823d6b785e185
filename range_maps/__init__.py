"""Species range-map ingestion.

Converts hand-authored KML range maps into GeoJSON feature collections
and imports them, one document per species, from Azure Blob Storage.
"""

__version__ = "0.1.0"
