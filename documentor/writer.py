"""CSV serialization of event records."""

import csv
import logging
import os
from typing import Iterable, Tuple

from documentor.config import CSV_COLUMNS
from documentor.models import EventRecord

logger = logging.getLogger(__name__)


def write_records_csv(
    records: Iterable[EventRecord],
    output_path: str,
    columns: Tuple[str, ...] = CSV_COLUMNS,
) -> int:
    """Write records to a CSV file, header row first.

    Args:
        records: Records to write, in the order they should appear.
        output_path: Destination file; parent directories are created.
        columns: Header names, matched to record fields positionally.

    Returns:
        Number of data rows written.
    """
    parent = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(parent, exist_ok=True)

    rows = 0
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns))
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_row(columns))
            rows += 1

    logger.debug("Wrote %d rows to %s", rows, output_path)
    return rows
