"""Result store for derived tables, figures and reports.

Layout under the output directory:
  - tables/:  JSON tables produced by the analyze flow
  - figures/: PNG figures rendered by the build flow
  - reports/: HTML report rendered by the build flow

Every JSON table is wrapped in a metadata envelope (source, generation time,
run parameters). Non-JSON outputs (figures, the report) get a sidecar
``.meta.json`` instead, so the data file stays in its native format.
"""

from __future__ import annotations

import json
import math
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from matplotlib.figure import Figure


def _json_safe(value: Any) -> Any:
    # NaN/inf (e.g. a t-test on identical pairs) are written as null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_json_safe(v) for v in value]
    return value


class ResultStore:
    """Reads and writes analysis outputs below a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.tables = base_dir / "tables"
        self.figures = base_dir / "figures"
        self.reports = base_dir / "reports"

    def read(self, path: Path) -> Any:
        """Read the data payload of an enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(self, path: Path, data: Any, source: str, **params: Any) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``tables/tdd_yearly.json``).
            data: Payload to store under the ``data`` key.
            source: Producer identifier (e.g. ``"indices.degree_days"``).
            **params: Extra metadata fields (thresholds, input files, ...).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        envelope = {"meta": self._meta(source, params), "data": _json_safe(data)}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)
        return full

    def save_figure(
        self,
        path: Path,
        figure: Figure,
        source: str,
        dpi: int = 150,
        **params: Any,
    ) -> Path:
        """Save a matplotlib figure with a sidecar ``.meta.json``."""
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(full, dpi=dpi, bbox_inches="tight")
        self._write_sidecar(full, source, params)
        return full

    def write_text(self, path: Path, text: str, source: str, **params: Any) -> Path:
        """Write a text output (e.g. the HTML report) with a sidecar ``.meta.json``."""
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        full.write_text(text, encoding="utf-8")
        self._write_sidecar(full, source, params)
        return full

    def file_path(self, path: Path) -> Path | None:
        """Return the absolute path of a stored file, or None if missing."""
        full = self._resolve(path)
        return full if full.exists() else None

    def _meta(self, source: str, params: dict[str, Any]) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "generated_at": datetime.now(UTC).isoformat(),
        }
        if params:
            meta.update(_json_safe(params))
        return meta

    def _write_sidecar(self, full: Path, source: str, params: dict[str, Any]) -> None:
        meta_path = full.with_suffix(full.suffix + ".meta.json")
        with meta_path.open("w") as f:
            json.dump({"meta": self._meta(source, params)}, f, indent=2)

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full
