"""
Custom exception classes for vendor API wrappers.
"""
from typing import Any, Optional


class ApiCallError(Exception):
    """
    Raised when a vendor call fails with an error that is not an exception.

    PlayFab reports failures as plain dicts, and a vendor may complete with
    neither an error nor a result. Both cases surface as this exception with
    the vendor's original error object left untouched in ``error``.
    """

    def __init__(
        self,
        message: str,
        api_name: Optional[str] = None,
        api_type: Optional[str] = None,
        error: Any = None
    ):
        """
        Initialize API call error.

        Args:
            message: Error message (the compiled error report)
            api_name: Name of the operation that failed
            api_type: Vendor family tag, e.g. "PlayFab" or "GameLift"
            error: Original vendor error object, or None if absent
        """
        super().__init__(message)
        self.message = message
        self.api_name = api_name
        self.api_type = api_type
        self.error = error
