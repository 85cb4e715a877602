"""
CSV parsing of an order-history export into ``OrderRecord`` objects.

The first line is the header; quoting follows standard CSV rules, so quoted
cells may contain commas and newlines. Values stay strings. Short rows are
padded with ``""`` and surplus cells on long rows are dropped, so every row
yields a record. Anything that cannot be decoded or parsed becomes an empty
list instead of an exception.
"""

import csv
import io
import logging
from pathlib import Path
from typing import List

import anyio

from spend.types import OrderRecord

LOG = logging.getLogger(__name__)

_SURPLUS = "__surplus__"


def parse_orders_text(text: str) -> List[OrderRecord]:
    reader = csv.DictReader(io.StringIO(text, newline=""), restkey=_SURPLUS, restval="")
    records: List[OrderRecord] = []
    try:
        for row in reader:
            cells = {k: v for k, v in row.items() if k and k != _SURPLUS}
            records.append(OrderRecord.model_validate(cells))
    except csv.Error as exc:
        LOG.warning("CSV parse failed at line %s: %s", reader.line_num, exc)
        return []
    LOG.info("Parsed %s records successfully.", len(records))
    return records


async def convert_csv_to_records(csv_path: Path, encoding: str = "utf-8-sig") -> List[OrderRecord]:
    try:
        raw = await anyio.Path(csv_path).read_bytes()
    except OSError:
        LOG.exception("Could not read staged upload %s", csv_path)
        return []
    try:
        text = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        LOG.warning("Upload %s is not %s text: %s", csv_path, encoding, exc)
        return []
    return parse_orders_text(text)
