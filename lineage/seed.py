"""
Bulk loading of locations from JSON.

The input is a JSON array of objects with "name", "population" and an
optional "parent". Entries go through LocationService.create() one by one,
so validation and uniqueness rules are the same as for the API.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from lineage.errors import LocationConflictError, LocationValidationError
from lineage.services import LocationService

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    """Outcome counts of a seeding run."""

    created: List[str] = field(default_factory=list)
    conflicts: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.conflicts) + len(self.invalid)


def load_entries(path: Path) -> List[Mapping[str, Any]]:
    """
    Read seed entries from a JSON file.

    Raises:
        ValueError: The file is not a JSON array of objects
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError("Seed file must contain a JSON array")
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Seed entry {index} is not an object")
    return data


async def seed_locations(
    service: LocationService,
    entries: Iterable[Mapping[str, Any]],
) -> SeedReport:
    """
    Create each entry in order.

    Existing names and invalid entries are counted and skipped; storage
    failures propagate and stop the run.
    """
    report = SeedReport()
    for entry in entries:
        label = str(entry.get("name"))
        try:
            await service.create(entry.get("name"), entry.get("population"), entry.get("parent"))
        except LocationConflictError:
            report.conflicts.append(label)
        except LocationValidationError as e:
            logger.warning(f"Skipping invalid seed entry {label}: {e}")
            report.invalid.append(label)
        else:
            report.created.append(label)

    logger.info(
        "Seeding finished",
        extra={
            "created": len(report.created),
            "conflicts": len(report.conflicts),
            "invalid": len(report.invalid),
        },
    )
    return report
