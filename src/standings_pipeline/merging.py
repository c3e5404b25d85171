"""Merge duplicate driver entries within one class.

Merge policy: every numeric championship field (points, penalties,
score, adjustment, actual points) is summed across occurrences, race
lists are concatenated in fold order, and car number and car name come
from the first occurrence. Nulls were already normalised to 0 on load.
"""

import logging
from typing import Dict, Iterable, List

from src.standings_pipeline.models import MergedStanding, StandingEntry

logger = logging.getLogger(__name__)


class DriverMerger:
    """Folds any number of standings per driver into one MergedStanding."""

    def merge(self, standings: Iterable[StandingEntry]) -> List[MergedStanding]:
        """Return one merged standing per driver, in first-occurrence order.

        Positions are left at 0 until the ranker assigns them.
        """
        by_driver: Dict[str, MergedStanding] = {}
        seen = 0
        for entry in standings:
            seen += 1
            existing = by_driver.get(entry.id)
            if existing is None:
                by_driver[entry.id] = MergedStanding.from_entry(entry)
            else:
                existing.absorb(entry)

        merged = list(by_driver.values())
        if seen != len(merged):
            logger.debug(
                "Merged %d standing(s) into %d driver(s)", seen, len(merged)
            )
        return merged
