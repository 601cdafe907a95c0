import csv
import logging
from typing import List

from ..core.record import Record
from ..utils.validators import validate_fqdn, validate_record_type, validate_ttl

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Name", "Type", "Value")


class CSVParser:
    def __init__(self, csv_path: str, default_ttl: int = 300):
        self.csv_path = csv_path
        self.default_ttl = default_ttl

    def parse(self) -> List[Record]:
        """Parse CSV file and validate records."""
        records = []

        try:
            with open(self.csv_path, "r", newline="") as f:
                reader = csv.DictReader(f)

                missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
                if missing:
                    raise ValueError(
                        f"CSV must contain {', '.join(REQUIRED_COLUMNS)} columns, "
                        f"missing {', '.join(missing)}"
                    )

                for row_num, row in enumerate(reader, start=2):
                    name = (row["Name"] or "").strip()
                    record_type = (row["Type"] or "").strip().upper()
                    value = (row["Value"] or "").strip()
                    ttl = (row.get("TTL") or "").strip() or self.default_ttl

                    if not validate_fqdn(name):
                        logger.warning(f"Invalid name '{name}' at row {row_num}, skipping")
                        continue

                    if not validate_record_type(record_type):
                        logger.warning(
                            f"Unsupported type '{record_type}' at row {row_num}, skipping"
                        )
                        continue

                    if not value:
                        logger.warning(f"Empty value at row {row_num}, skipping")
                        continue

                    if not validate_ttl(ttl):
                        logger.warning(f"Invalid TTL '{ttl}' at row {row_num}, skipping")
                        continue

                    records.append(
                        Record.from_dict(
                            {"name": name, "type": record_type, "value": value, "ttl": ttl}
                        )
                    )

            logger.info(f"Successfully parsed {len(records)} records from CSV")

        except FileNotFoundError:
            raise FileNotFoundError(f"CSV file not found: {self.csv_path}")

        return records
