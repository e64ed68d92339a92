from __future__ import annotations

import csv
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List

from .errors import WorkloadError
from .models import Process, SimulationResult
from .validation import find_duplicate_pids, validate

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Each entry is validated; insertion order follows the order of entries in
    the file.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if not path.is_file():
        raise WorkloadError(f"Workload not found: {path}")

    if suffix == ".json":
        entries = _load_json(path)
    elif suffix == ".csv":
        entries = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    processes = [_process_from_mapping(entry, index) for index, entry in enumerate(entries)]

    duplicates = find_duplicate_pids(processes)
    if duplicates:
        raise WorkloadError(f"Duplicate process id(s) in {path}: {', '.join(duplicates)}")

    logger.debug("loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> list:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return raw


def _load_csv(path: Path) -> list:
    with path.open("r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def _coerce_int(value):
    # CSV cells arrive as strings; blanks and junk are left for the validator.
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return value


def _process_from_mapping(mapping, index: int) -> Process:
    if not isinstance(mapping, dict):
        raise WorkloadError(f"Invalid process entry #{index + 1}: {mapping!r}")

    pid = mapping.get("pid")
    candidate = {
        "pid": str(pid).strip() if pid is not None else None,
        "arrival_time": _coerce_int(mapping.get("arrival_time")),
        "burst_time": _coerce_int(mapping.get("burst_time")),
        "priority": _coerce_int(mapping.get("priority")),
    }

    check = validate(candidate)
    if not check.valid:
        raise WorkloadError(f"Invalid process entry #{index + 1} ({mapping!r}): {'; '.join(check.errors)}")

    return Process(insertion_order=index, **candidate)


def result_to_dict(result: SimulationResult) -> dict:
    """
    JSON-friendly view of a simulation result.
    """
    data = asdict(result)
    data["policy"] = result.policy.value if result.policy is not None else None
    data["algorithm"] = result.algorithm
    return data
