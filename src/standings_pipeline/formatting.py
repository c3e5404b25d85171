"""Fixed-width text report for posting standings to a chat channel.

Each class gets a bold heading and a code-fenced table so the chat
client renders it in a monospace font::

    🏁 **Standings**

    **GT3**
    ```
      1. | Alice           | Porsche       |    18
      2. | Bob             | Ferrari       |     9
    ```

Column widths are fixed. Over-long text is cut and marked, a number too
wide for its column is shown as `#####`, and short text is padded, so
every row in every table has the same length.
"""

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from src.standings_pipeline.config import (
    CLASS_HEADING_TEMPLATE,
    CODE_FENCE,
    COLUMN_SEPARATOR,
    COLUMN_WIDTHS,
    NUMERIC_OVERFLOW_FILL,
    POINTS_DECIMALS,
    REPORT_HEADING,
    TRUNCATION_MARKER,
)
from src.standings_pipeline.models import ClassStandings, MergedStanding

logger = logging.getLogger(__name__)


@dataclass
class ReportLayout:
    """Presentation settings for the standings report."""

    column_widths: Dict[str, int] = field(
        default_factory=lambda: dict(COLUMN_WIDTHS)
    )
    points_decimals: int = POINTS_DECIMALS
    heading: str = REPORT_HEADING
    class_heading_template: str = CLASS_HEADING_TEMPLATE
    fence: str = CODE_FENCE
    separator: str = COLUMN_SEPARATOR
    truncation_marker: str = TRUNCATION_MARKER
    numeric_overflow_fill: str = NUMERIC_OVERFLOW_FILL

    def __post_init__(self):
        missing = set(COLUMN_WIDTHS) - self.column_widths.keys()
        if missing:
            raise ValueError(f"Missing column widths: {sorted(missing)}")
        for column, width in self.column_widths.items():
            if width < 1:
                raise ValueError(f"Column {column!r} width must be >= 1, got {width}")
        if self.points_decimals < 0:
            raise ValueError("points_decimals cannot be negative")
        if len(self.numeric_overflow_fill) != 1:
            raise ValueError("numeric_overflow_fill must be a single character")

    @property
    def row_width(self) -> int:
        """Length of every rendered table row."""
        widths = [self.column_widths[c] for c in COLUMN_WIDTHS]
        return sum(widths) + len(self.separator) * (len(widths) - 1)


def truncate_text(text: str, width: int, marker: str = TRUNCATION_MARKER) -> str:
    """Cut *text* to *width* characters, ending in *marker* when cut."""
    if len(text) <= width:
        return text
    if len(marker) >= width:
        return marker[:width]
    return text[: width - len(marker)] + marker


def format_points(value, decimals: int) -> str:
    """Format *value* with *decimals* places, rounding halves away from zero."""
    exponent = Decimal(1).scaleb(-decimals)
    return format(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP), "f")


class ReportFormatter:
    """Renders ranked class standings as a chat-ready text block."""

    def __init__(self, layout: Optional[ReportLayout] = None):
        self.layout = layout or ReportLayout()

    def _cell(self, text: str, column: str) -> str:
        width = self.layout.column_widths[column]
        text = truncate_text(text, width, self.layout.truncation_marker)
        return text.ljust(width)

    def _number_cell(self, text: str, column: str) -> str:
        """Right-align a number; a number too wide is replaced by fill characters."""
        width = self.layout.column_widths[column]
        if len(text) > width:
            return self.layout.numeric_overflow_fill * width
        return text.rjust(width)

    def format_row(self, standing: MergedStanding) -> str:
        """Render one standing as a fixed-width table row."""
        points = format_points(standing.championship_points, self.layout.points_decimals)
        cells = [
            self._number_cell(f"{standing.position}.", "position"),
            self._cell(standing.id.strip(), "driver"),
            self._cell(standing.car.strip(), "car"),
            self._number_cell(points, "points"),
        ]
        return self.layout.separator.join(cells)

    def format_class(self, class_standings: ClassStandings) -> List[str]:
        """Render the heading and fenced table for one class."""
        lines = [
            self.layout.class_heading_template.format(
                car_class=class_standings.car_class
            ),
            self.layout.fence,
        ]
        lines.extend(self.format_row(s) for s in class_standings.standings)
        lines += [self.layout.fence, ""]
        return lines

    def format(self, results: Iterable[ClassStandings]) -> str:
        """Return the full report, classes in the order given."""
        lines = [self.layout.heading, ""]
        n_classes = 0
        for class_standings in results:
            lines.extend(self.format_class(class_standings))
            n_classes += 1

        logger.info("Formatted report for %d class(es)", n_classes)
        return "\n".join(lines)
