"""Exportación JSON del bundle.

Por qué JSON:
- Interoperabilidad con otras herramientas (scripts de mantenimiento, CI).
- Permite inspeccionar checksums/dependencias sin depender del render Tcl.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from go2port.core.domain.models import PortBundle


def bundles_payload(bundles: Sequence[PortBundle]) -> list[dict[str, object]]:
    return [bundle.model_dump(mode="json") for bundle in bundles]


def export_bundles_json(*, bundles: Sequence[PortBundle], output_path: Path) -> Path:
    """Exporta los bundles a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(bundles_payload(bundles), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
