"""Exportación JSON del reporte de validación.

Por qué JSON:
- Interoperabilidad con pipelines (CI de editores, dashboards).
- Persiste entradas anotadas y mensajes sin depender de la salida Rich.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.services.report import ValidationReport


def report_to_json(report: ValidationReport) -> str:
    payload = report.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_report_json(*, report: ValidationReport, output_path: Path) -> Path:
    """Exporta `ValidationReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report_to_json(report), encoding="utf-8")
    return output_path
