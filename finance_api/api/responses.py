# finance_api/api/responses.py
from typing import Any, Dict, Optional

def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a payload in the ``{"success": true, "data": ...}`` envelope."""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body
