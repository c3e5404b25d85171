from src.standings_pipeline.formatting import ReportFormatter, ReportLayout
from src.standings_pipeline.grouping import ClassGrouper
from src.standings_pipeline.ingestion import (
    FragmentLoader,
    MalformedFragmentError,
    SourceUnavailableError,
)
from src.standings_pipeline.merging import DriverMerger
from src.standings_pipeline.models import (
    ClassData,
    ClassStandings,
    MergedStanding,
    RaceResult,
    StandingEntry,
)
from src.standings_pipeline.ranking import StandingsRanker

__all__ = [
    "ClassData",
    "ClassGrouper",
    "ClassStandings",
    "DriverMerger",
    "FragmentLoader",
    "MalformedFragmentError",
    "MergedStanding",
    "RaceResult",
    "ReportFormatter",
    "ReportLayout",
    "SourceUnavailableError",
    "StandingEntry",
    "StandingsRanker",
]
