"""
Result export.

Writes analysis reports as JSON (the full classification plus UniProt
metadata) or as a sectioned, spreadsheet-friendly CSV report:

    "Protein Analysis Export"

    "SEQUENCE INFORMATION"
    "Sequence ID","Length","Overall Confidence"
    ...
    "UNIPROT METADATA"            (only when an entry was fetched)
    "PRIMARY FUNCTIONS"
    "GO ID","Function Name","Type","Confidence","Description"
    ...
    "SECONDARY FUNCTIONS"
    ...
"""

from __future__ import annotations

import csv
import io
import json
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from .core.models import FunctionalCategory
from .pipeline import AnalysisReport

logger = logging.getLogger(__name__)

FUNCTION_HEADER = ["GO ID", "Function Name", "Type", "Confidence", "Description"]


def report_to_dict(report: AnalysisReport, export_date: Optional[datetime] = None) -> dict[str, Any]:
    """
    Build the JSON export payload.

    Args:
        report: Analysis report
        export_date: Timestamp to record (defaults to now, UTC)

    Returns:
        Dictionary with classification, uniprot_data and export_date
    """
    export_date = export_date or datetime.now(timezone.utc)
    return {
        "classification": report.classification.model_dump(mode="json"),
        "uniprot_data": report.uniprot.model_dump(mode="json") if report.uniprot else None,
        "export_date": export_date.isoformat(),
    }


def _function_rows(functions: list[FunctionalCategory]) -> list[list[str]]:
    return [
        [f.id, f.name, f.type.label, f"{f.confidence:.3f}", f.description]
        for f in functions
    ]


def report_to_rows(report: AnalysisReport) -> list[list[str]]:
    """Lay out the CSV report as rows of cells."""
    result = report.classification
    rows: list[list[str]] = [
        ["Protein Analysis Export"],
        [],
        ["SEQUENCE INFORMATION"],
        ["Sequence ID", "Length", "Overall Confidence"],
        [result.sequence_id, str(result.length), f"{result.confidence:.3f}"],
    ]

    if report.uniprot:
        entry = report.uniprot
        rows += [
            [],
            ["UNIPROT METADATA"],
            ["Accession", entry.accession],
            ["Protein Name", entry.protein_name],
            ["Gene", entry.gene or "N/A"],
            ["Organism", entry.organism.scientific_name],
        ]

    rows += [
        [],
        ["PRIMARY FUNCTIONS"],
        FUNCTION_HEADER,
        *_function_rows(result.primary_functions),
        [],
        ["SECONDARY FUNCTIONS"],
        FUNCTION_HEADER,
        *_function_rows(result.secondary_functions),
    ]
    return rows


def report_to_csv(report: AnalysisReport) -> str:
    """Render the CSV report with every cell quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(report_to_rows(report))
    return buffer.getvalue().rstrip("\n")


def default_export_name(report: AnalysisReport, fmt: str) -> str:
    """File name of the form protein-analysis-<id>-<epoch ms>.<fmt>."""
    safe_id = re.sub(r"[^A-Za-z0-9_.-]", "_", report.sequence_id)
    return f"protein-analysis-{safe_id}-{int(time.time() * 1000)}.{fmt}"


def export_json(report: AnalysisReport, filepath: Union[str, Path]) -> Path:
    """
    Export an analysis report to JSON.

    Args:
        report: Analysis report
        filepath: Output file path

    Returns:
        Path to created file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        json.dump(report_to_dict(report), f, indent=2)

    logger.info(f"Exported {report.sequence_id} to {filepath}")
    return filepath


def export_csv(report: AnalysisReport, filepath: Union[str, Path]) -> Path:
    """
    Export an analysis report to the sectioned CSV format.

    Args:
        report: Analysis report
        filepath: Output file path

    Returns:
        Path to created file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", newline="") as f:
        f.write(report_to_csv(report))

    logger.info(f"Exported {report.sequence_id} to {filepath}")
    return filepath


def export_report(
    report: AnalysisReport,
    output_dir: Union[str, Path],
    fmt: str = "json",
) -> Path:
    """
    Export a report into a directory using the default file name.

    Raises:
        ValueError: For unknown formats
    """
    exporters = {"json": export_json, "csv": export_csv}
    if fmt not in exporters:
        raise ValueError(f"Unknown export format: {fmt}")
    return exporters[fmt](report, Path(output_dir) / default_export_name(report, fmt))
