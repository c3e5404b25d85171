"""Rank merged standings and assign 1-based positions."""

import logging
from typing import List, Sequence

import pandas as pd

from src.standings_pipeline.models import MergedStanding

logger = logging.getLogger(__name__)


class StandingsRanker:
    """Orders standings by championship points, then championship score."""

    @staticmethod
    def sort_order(standings: Sequence[MergedStanding]) -> List[int]:
        """Return input indices in ranked order.

        Sort keys: points descending, score descending, input index
        ascending. The index key keeps exact ties in first-occurrence
        order.
        """
        if not standings:
            return []
        frame = pd.DataFrame(
            {
                "points": [s.championship_points for s in standings],
                "score": [s.championship_score for s in standings],
                "order": range(len(standings)),
            }
        )
        ranked = frame.sort_values(
            ["points", "score", "order"],
            ascending=[False, False, True],
            kind="stable",
        )
        return ranked["order"].tolist()

    def rank(self, standings: Sequence[MergedStanding]) -> List[MergedStanding]:
        """Sort *standings* and overwrite each position with index + 1."""
        ranked = [standings[i] for i in self.sort_order(standings)]
        for index, standing in enumerate(ranked):
            standing.position = index + 1

        if ranked:
            leader = ranked[0]
            logger.debug(
                "Ranked %d driver(s); leader %s with %s pts",
                len(ranked), leader.id, leader.championship_points,
            )
        return ranked
