import logging
from typing import Optional

# Deployed Apps Script web app backing the records sheet
WEB_APP_URL = "https://script.google.com/macros/s/AKfycbyPCU-a7KzNSN8w0-VeUaVqUZrAR420uQSXBMf2gYovEskzNk-4u21257MG-5VNgM0/exec"

# None disables httpx timeouts; a hung request stays pending
REQUEST_TIMEOUT: Optional[float] = None

EXPORT_FILENAME = "our_kindness_records.xlsx"
EXPORT_SHEET_NAME = "Our records"
EXPORT_COLUMNS = ("Type", "Date", "Content", "Reaction", "Mood", "Timestamp")

CHART_TITLE = "Mood overview"
CHART_SERIES_LABEL = "Records per mood"
MOOD_PALETTE = ("#FFC107", "#FF7043", "#8BC34A", "#2196F3", "#9C27B0")
MISSING_MOOD_LABEL = "(none)"

DATE_INPUT_FORMAT = "%Y-%m-%d"
DATE_DISPLAY_FORMAT = "%x"

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
