import base64
from io import BytesIO
from typing import Any, Dict


def export_file_from_response(payload: Dict[str, Any]) -> BytesIO:
    """Decode the backend's base64 export into a named file-like object."""
    file_obj = BytesIO(base64.b64decode(payload["content_b64"]))
    file_obj.name = payload["filename"]
    return file_obj
