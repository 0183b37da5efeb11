import io
import logging
from typing import Any, Iterable

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from kindlog.config import EXPORT_SHEET_NAME
from kindlog.domain import Record
from kindlog.transforms import records_frame

logger = logging.getLogger(__name__)


def strip_illegal(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def workbook_bytes(records: Iterable[Record], sheet_name: str = EXPORT_SHEET_NAME) -> bytes:
    """Write records, one row each with every field as received, to a single-sheet xlsx.

    Text is always stored as text, so values such as "=1+1" are not turned
    into formulas. Control characters that xlsx cannot hold are dropped.
    """
    df = records_frame(records)
    changed = sum(
        1 for v in df.to_numpy().ravel()
        if isinstance(v, str) and ILLEGAL_CHARACTERS_RE.search(v)
    )
    cleaned = df.apply(lambda col: col.map(strip_illegal))
    if changed:
        logger.warning(f"Removed characters xlsx cannot store from {changed} exported cells")

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        cleaned.to_excel(writer, sheet_name=sheet_name, index=False)
        for row in writer.sheets[sheet_name].iter_rows(min_row=2):
            for cell in row:
                if isinstance(cell.value, str):
                    cell.data_type = "s"
    logger.info(f"Prepared xlsx export with {len(df)} records")
    return output.getvalue()
