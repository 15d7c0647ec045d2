"""MaintenanceRecord class for logged service events."""
from typing import Optional


class MaintenanceRecord:
    """A record of maintenance performed in a category."""

    def __init__(
            self,
            category: str,
            date: str,
            company: str,
            type: str,
            notes: Optional[str] = None,
            pdf_name: Optional[str] = None,
            pdf_data: Optional[bytes] = None,
            record_id: Optional[int] = None,
    ):
        self.category = category
        self.date = date
        self.company = company
        self.type = type
        self.notes = notes
        self.pdf_name = pdf_name
        self.pdf_data = pdf_data
        self.record_id = record_id

    @property
    def has_pdf(self) -> bool:
        return bool(self.pdf_name)
