"""
Local work item domain model.
"""
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LocalWorkItem:
    """Local input/output file locations for one record."""

    input_path: Path
    output_path: Path
