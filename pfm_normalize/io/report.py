"""Normalization report saving utilities."""

from pathlib import Path
from typing import Dict
import json

from pfm_normalize.errors import ReportError


def save_report(report: Dict, output_path: Path) -> None:
    """
    Save a normalization report to JSON file.

    Args:
        report: Report dictionary to save
        output_path: Path to output JSON file

    Raises:
        ReportError: If the file cannot be written
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ReportError(f"Error writing report {output_path}: {e}") from e
