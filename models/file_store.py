"""Filesystem record store: one folder per category, YAML record lists."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .calculations import service_date_key
from .record import MaintenanceRecord

logger = logging.getLogger(__name__)

RECORDS_FILE = "records.yaml"


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    """Serialize a record to the YAML dict format, omitting empty fields."""
    d: Dict[str, Any] = {
        "date": record.date,
        "company": record.company,
        "type": record.type,
    }
    if record.notes is not None:
        d["notes"] = record.notes
    if record.pdf_name is not None:
        d["pdf"] = record.pdf_name
    return d


def _record_from_dict(category: str, index: int, dct: Dict[str, Any]) -> MaintenanceRecord:
    return MaintenanceRecord(
        category=category,
        date=str(dct.get("date", "")),
        company=dct.get("company", ""),
        type=dct.get("type", ""),
        notes=dct.get("notes"),
        pdf_name=dct.get("pdf"),
        record_id=index,
    )


class FileRecordStore:
    """
    Records kept under a home directory:

        <home>/categories/<Category>/records.yaml
        <home>/uploads/<epoch-millis>-<name>.pdf

    Category folders are the category universe. A record's id is its
    position in the category's records file.
    """

    def __init__(self, home: Union[str, Path]):
        self.home = Path(home)
        self.categories_dir = self.home / "categories"
        self.uploads_dir = self.home / "uploads"

    def _records_path(self, category: str) -> Path:
        return self.categories_dir / category / RECORDS_FILE

    def _load_raw(self, category: str) -> List[Dict[str, Any]]:
        path = self._records_path(category)
        if not path.exists():
            return []
        with open(path, "r") as fp:
            return yaml.load(fp, Loader=yaml.SafeLoader) or []

    def _save_raw(self, category: str, data: List[Dict[str, Any]]) -> None:
        path = self._records_path(category)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as fp:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )

    def list_categories(self) -> List[str]:
        """Category folder names, sorted."""
        if not self.categories_dir.is_dir():
            return []
        return sorted(p.name for p in self.categories_dir.iterdir() if p.is_dir())

    def ensure_category(self, name: str) -> None:
        (self.categories_dir / name).mkdir(parents=True, exist_ok=True)

    def records_for(self, category: str) -> List[MaintenanceRecord]:
        """Records in date order; records sharing a moment keep file order."""
        records = [
            _record_from_dict(category, i, dct)
            for i, dct in enumerate(self._load_raw(category))
        ]
        logger.debug("Loaded %d records for %s", len(records), category)
        return sorted(records, key=lambda r: service_date_key(r.date))

    def add_record(self, record: MaintenanceRecord) -> MaintenanceRecord:
        """
        Append a record to its category's records file.

        PDF bytes are written to the uploads folder and the record keeps
        only the stored filename.
        """
        pdf_name = None
        if record.pdf_name and record.pdf_data is not None:
            pdf_name = f"{int(time.time() * 1000)}-{Path(record.pdf_name).name}"
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            (self.uploads_dir / pdf_name).write_bytes(record.pdf_data)

        data = self._load_raw(record.category)
        stored = MaintenanceRecord(
            category=record.category,
            date=record.date,
            company=record.company,
            type=record.type,
            notes=record.notes,
            pdf_name=pdf_name,
            record_id=len(data),
        )
        data.append(_record_to_dict(stored))
        self._save_raw(record.category, data)
        logger.info("Stored record %d for %s", stored.record_id, record.category)
        return stored

    def get_pdf(self, category: str, record_id: int) -> Optional[Tuple[str, bytes]]:
        """Stored PDF for a record as (filename, bytes), or None."""
        data = self._load_raw(category)
        if record_id < 0 or record_id >= len(data):
            return None
        pdf_name = data[record_id].get("pdf")
        if not pdf_name:
            return None
        path = self.uploads_dir / Path(pdf_name).name
        if not path.exists():
            logger.warning("PDF missing from uploads: %s", path)
            return None
        return pdf_name, path.read_bytes()
