"""
Downloads event exports produced by the backend.
"""
import logging
from io import BytesIO
from typing import Any, Callable, Optional

from auntrack_ui.app_lib.api.client import APIClient
from auntrack_ui.app_lib.api.errors import APIError
from auntrack_ui.app_lib.utils.helpers import export_file_from_response

logger = logging.getLogger("EXPORT_SERVICE")

EXPORT_FORMATS = {
    "Excel (.xlsx)": "xlsx",
    "CSV (.csv)": "csv",
    "Word (.docx)": "docx",
}


class ExportService:
    def __init__(self, client: APIClient, notify: Optional[Callable[[str], Any]] = None):
        self.client = client
        self.notify = notify or (lambda message: logger.info(message))

    def fetch(self, export_format: str) -> Optional[BytesIO]:
        """File-like export with ``name`` set, or None after notifying."""
        try:
            payload = self.client.get("/api/export/events", params={"format": export_format})
            return export_file_from_response(payload)
        except APIError as e:
            self.notify(e.message)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected export payload: {e}")
            self.notify("Export failed")
        return None
