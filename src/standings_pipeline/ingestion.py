"""Fragment ingestion for championship standings.

A fragment is a JSON file holding a list of class records::

    [{"carClass": "GT3", "standings": [{"id": "Alice", ...}, ...]}, ...]

Every fragment in the intake directory is parsed into typed models and
the class records are concatenated in discovery order. A single bad
fragment fails the whole load; there is no partial-success mode.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from src.standings_pipeline.config import FRAGMENT_SUFFIX
from src.standings_pipeline.models import ClassData, RaceResult, StandingEntry

logger = logging.getLogger(__name__)

# Wire key -> StandingEntry attribute for the summed championship fields
_CHAMPIONSHIP_FIELDS = {
    "championshipPoints": "championship_points",
    "championshipPenalties": "championship_penalties",
    "championshipScore": "championship_score",
    "pointsAdjustment": "points_adjustment",
    "actualPoints": "actual_points",
}


class SourceUnavailableError(Exception):
    """Raised when the fragment source cannot be listed or read."""


class MalformedFragmentError(Exception):
    """Raised when a fragment does not deserialize into class records."""


def _parse_number(record: dict, key: str, default=0):
    """Read a numeric field, treating a missing or null value as *default*."""
    value = record.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number, got {value!r}")
    return value


def _parse_flag(record: dict, key: str) -> bool:
    """Read a boolean flag, treating a missing or null value as False."""
    value = record.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be true or false, got {value!r}")
    return value


def _require(record: dict, key: str, kind: type, what: str):
    if key not in record:
        raise ValueError(f"{what} is missing {key!r}")
    value = record[key]
    if not isinstance(value, kind):
        raise ValueError(f"{what} field {key!r} has unexpected value {value!r}")
    return value


def _parse_race(raw) -> RaceResult:
    if not isinstance(raw, dict):
        raise ValueError(f"race result must be an object, got {raw!r}")
    return RaceResult(
        position=_parse_number(raw, "position", default=None),
        points_given=_parse_number(raw, "pointsGiven"),
        penalty_points=_parse_number(raw, "penaltyPoints", default=None),
        points_total=_parse_number(raw, "pointsTotal"),
        dnf=_parse_flag(raw, "dnf"),
        dns=_parse_flag(raw, "dns"),
    )


def _parse_standing(raw) -> StandingEntry:
    if not isinstance(raw, dict):
        raise ValueError(f"standing must be an object, got {raw!r}")
    driver_id = _require(raw, "id", str, "standing")
    races = raw.get("races") or []
    if not isinstance(races, list):
        raise ValueError(f"races for {driver_id!r} must be a list")

    car = raw.get("car")
    return StandingEntry(
        position=_parse_number(raw, "position"),
        id=driver_id,
        car_num=_parse_number(raw, "carNum", default=None),
        car="" if car is None else str(car),
        races=[_parse_race(r) for r in races],
        **{
            attr: _parse_number(raw, key)
            for key, attr in _CHAMPIONSHIP_FIELDS.items()
        },
    )


def _parse_class(raw) -> ClassData:
    if not isinstance(raw, dict):
        raise ValueError(f"class record must be an object, got {raw!r}")
    car_class = _require(raw, "carClass", str, "class record")
    standings = _require(raw, "standings", list, f"class {car_class!r}")
    return ClassData(
        car_class=car_class,
        standings=[_parse_standing(s) for s in standings],
    )


class FragmentLoader:
    """Reads every standings fragment found in an intake directory."""

    def __init__(self, intake_dir: Path, suffix: Optional[str] = None):
        self.intake_dir = Path(intake_dir)
        self.suffix = suffix or FRAGMENT_SUFFIX

    def list_fragments(self) -> List[Path]:
        """Return fragment paths in the intake directory, sorted by name.

        Raises:
            SourceUnavailableError: if the directory cannot be listed.
        """
        if not self.intake_dir.is_dir():
            raise SourceUnavailableError(
                f"Intake directory not found: {self.intake_dir}"
            )
        try:
            paths = [
                p for p in self.intake_dir.iterdir()
                if p.is_file() and p.name.endswith(self.suffix)
            ]
        except OSError as e:
            raise SourceUnavailableError(
                f"Cannot list intake directory {self.intake_dir}: {e}"
            ) from e

        paths.sort(key=lambda p: p.name)
        logger.debug("Found %d fragment(s) in %s", len(paths), self.intake_dir)
        return paths

    def read_fragment(self, path: Path) -> List[ClassData]:
        """Parse one fragment file into class records.

        Raises:
            SourceUnavailableError: if the file cannot be read.
            MalformedFragmentError: if the content has the wrong shape.
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFragmentError(f"{path.name}: not valid UTF-8: {e}") from e
        except OSError as e:
            raise SourceUnavailableError(f"Cannot read fragment {path}: {e}") from e

        try:
            data = json.loads(content)
            if not isinstance(data, list):
                raise ValueError(
                    f"expected a list of class records, got {type(data).__name__}"
                )
            classes = [_parse_class(c) for c in data]
        except ValueError as e:
            raise MalformedFragmentError(f"{path.name}: {e}") from e

        logger.info(
            "Read fragment %s: %d class(es), %d standing(s)",
            path.name, len(classes), sum(len(c.standings) for c in classes),
        )
        return classes

    def read_all(self) -> List[ClassData]:
        """Read every fragment and concatenate their class records.

        Order is fragment discovery order, then in-fragment order.
        """
        all_classes: List[ClassData] = []
        fragments = self.list_fragments()
        for path in fragments:
            all_classes.extend(self.read_fragment(path))

        if not fragments:
            logger.warning("No %s fragments in %s", self.suffix, self.intake_dir)
        logger.info(
            "Loaded %d class record(s) from %d fragment(s)",
            len(all_classes), len(fragments),
        )
        return all_classes
