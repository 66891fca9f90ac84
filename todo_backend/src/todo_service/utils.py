from __future__ import annotations

from typing import Any, Dict, Optional


# PUBLIC_INTERFACE
def result_envelope(result: Any = None, error_message: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the standard JSON envelope for API responses.

    Args:
        result: Operation result, omitted when None.
        error_message: Failure description, omitted when None.

    Returns:
        Dict with the keys 'result' and/or 'errorMessage'.
    """
    envelope: Dict[str, Any] = {}
    if result is not None:
        envelope["result"] = result
    if error_message is not None:
        envelope["errorMessage"] = error_message
    return envelope
