from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List

from .errors import WorkloadFormatError
from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a batch from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadFormatError(f"Unsupported workload format: {suffix or path.name} (use .json or .csv)")

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"{path}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path}: not UTF-8 text ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        try:
            return [_process_from_mapping(row) for row in reader]
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path}: not UTF-8 text ({exc})") from exc


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def _as_int(value) -> int:
    # int() alone would turn 2.7 into 2 and True into 1.
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(value)
