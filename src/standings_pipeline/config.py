from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Fragment intake and report output
INTAKE_DIR = PROJECT_ROOT / "intake"
RESULT_FILE = PROJECT_ROOT / "result.txt"

# Only files with this suffix are treated as fragments
FRAGMENT_SUFFIX = ".json"

# Report column widths (characters)
COLUMN_WIDTHS = {
    "position": 4,   # " 1." format
    "driver": 15,
    "car": 13,
    "points": 5,
}

# Decimal places shown for championship points
POINTS_DECIMALS = 0

# Report text
REPORT_HEADING = "\U0001F3C1 **Standings**"
CLASS_HEADING_TEMPLATE = "**{car_class}**"
CODE_FENCE = "```"
COLUMN_SEPARATOR = " | "
TRUNCATION_MARKER = "."
# Fills a number cell that does not fit its column
NUMERIC_OVERFLOW_FILL = "#"
