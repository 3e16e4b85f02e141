"""Input data sources.

Each subpackage is one kind of input with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # File format constants and readers
    ├── models.py         # Dataclasses / pydantic models for parsed rows
    └── {feature}.py      # Cleaning or derivation specific to the source

  - station/    daily station parameters, calendar alignment, July summary
  - phenology/  per-plot flowering and seed-set counts

Readers never coerce silently at the file level: a missing file or column
raises ``InputFileError`` naming both. Cell-level noise becomes absent values.
"""
