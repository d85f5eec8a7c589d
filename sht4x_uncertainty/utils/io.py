"""
SHT4x Calibration Utils - Result I/O
=====================================

Serialization of run results.

Formats:
--------
1. JSON records
   {"description": ..., "results": [{"variableSymbol": "outputDistributions[0]",
    "variableDescription": "Calibrated Relative Humidity",
    "values": [...], "count": N}]}
   Native records hold one value, the distribution mean, and add
   "statistic": "mean" and "support": [min, max].

2. CSV snapshot (non-sampling runs)
   Header row of output labels, one row of values.

3. Monte Carlo dump (sampling runs)
   One sample per line, then the elapsed CPU time in microseconds.

4. Benchmark line
   "<primary value> <elapsed microseconds>"

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import csv
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence, TextIO, Tuple
import logging

logger = logging.getLogger(__name__)

JSON_DESCRIPTION = "SHT4xARP Sensor Calibration Use Case"


@dataclass(frozen=True)
class OutputRecord:
    """One structured output variable."""
    index: int
    label: str
    values: Sequence[float]
    statistic: Optional[str] = None
    support: Optional[Tuple[float, float]] = None

    @property
    def symbol(self) -> str:
        return f"outputDistributions[{self.index}]"

    def as_dict(self) -> Dict[str, Any]:
        values = [float(v) for v in self.values]
        record = {
            "variableSymbol": self.symbol,
            "variableDescription": self.label,
            "values": values,
            "count": len(values),
        }
        if self.statistic is not None:
            record["statistic"] = self.statistic
        if self.support is not None:
            record["support"] = [float(b) for b in self.support]
        return record


def build_json_document(records: List[OutputRecord],
                        description: str = JSON_DESCRIPTION) -> Dict[str, Any]:
    return {
        "description": description,
        "results": [record.as_dict() for record in records],
    }


def write_json(records: List[OutputRecord],
               stream: Optional[TextIO] = None,
               description: str = JSON_DESCRIPTION) -> None:
    """Print records as one JSON document."""
    stream = stream if stream is not None else sys.stdout
    json.dump(build_json_document(records, description), stream, indent=2)
    stream.write("\n")


def write_csv_snapshot(output_path: str,
                       labels: Sequence[str],
                       values: Sequence[float]) -> None:
    """
    Save output values to CSV.

    Args:
        output_path: Destination file
        labels: Column headers
        values: One value per column
    """
    if len(labels) != len(values):
        raise ValueError("CSV snapshot needs one value per label")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(labels)
        writer.writerow([f"{float(v):f}" for v in values])

    logger.info(f"Saved CSV snapshot to {output_path}")


def save_monte_carlo_samples(samples: Sequence[float],
                             elapsed_microseconds: int,
                             output_path: str = "data.out") -> None:
    """
    Dump raw Monte Carlo samples for offline analysis.

    Args:
        samples: Retained output samples
        elapsed_microseconds: CPU time of the run
        output_path: Destination file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        for value in samples:
            f.write(f"{float(value):f}\n")
        f.write(f"{int(elapsed_microseconds)}\n")

    logger.info(f"Saved {len(samples)} Monte Carlo samples to {output_path}")


def format_benchmark_line(primary: float, elapsed_microseconds: int) -> str:
    return f"{float(primary):f} {int(elapsed_microseconds)}"
