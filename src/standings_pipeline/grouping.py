"""Group class records from all fragments by class name."""

import logging
from typing import Dict, Iterable, List

from src.standings_pipeline.models import ClassData, StandingEntry

logger = logging.getLogger(__name__)


class ClassGrouper:
    """Concatenates the standings reported for each class across fragments."""

    def group(self, class_records: Iterable[ClassData]) -> Dict[str, List[StandingEntry]]:
        """Map class name -> every standing reported for it.

        Classes keep their order of first appearance and standings keep
        their input order. Drivers are not deduplicated here.
        """
        grouped: Dict[str, List[StandingEntry]] = {}
        for record in class_records:
            grouped.setdefault(record.car_class, []).extend(record.standings)

        logger.info("Grouped standings into %d class(es)", len(grouped))
        for car_class, standings in grouped.items():
            logger.debug("Class %s: %d standing(s)", car_class, len(standings))
        return grouped
