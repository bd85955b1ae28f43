"""
Vendor response handling shared by the GameLift and PlayFab wrappers.

A completed vendor call yields an outcome pair ``(error, result)``. The
dispatcher logs one line per outcome and settles the caller's future; the
compiler turns a vendor error into the readable report used in that line.
"""
import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError
from logger_config import get_logger
from utils.exceptions import ApiCallError

logger = get_logger(__name__)

GAMELIFT = 'GameLift'
PLAYFAB = 'PlayFab'


@dataclass(frozen=True)
class ErrorFields:
    """The parts of a vendor error the report compiler reads."""

    message: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Any = None

    @classmethod
    def from_error(cls, error: Any) -> "ErrorFields":
        """
        Extract error fields from a vendor error object.

        Args:
            error: A PlayFab error dict, a botocore ClientError or any other
                exception

        Returns:
            ErrorFields with only the fields the error actually carries
        """
        if isinstance(error, Mapping):
            return cls(
                message=error.get('message'),
                error_message=error.get('errorMessage'),
                error_details=error.get('errorDetails'),
            )

        if isinstance(error, ClientError):
            message = error.response.get('Error', {}).get('Message')
            return cls(message=message or str(error))

        return cls(message=str(error))


def _detail_lines(error_details: Mapping) -> List[str]:
    lines = []
    for param_name, messages in error_details.items():
        if isinstance(messages, str) or not isinstance(messages, Iterable):
            messages = [messages]
        for msg in messages:
            lines.append(f'{param_name}: {msg}')
    return lines


def compile_error_report(error: Any, api_type: str) -> str:
    """
    Compile a vendor error into a readable error report.

    Args:
        error: The vendor error object (None yields an empty report)
        api_type: Vendor family tag, e.g. "PlayFab" or "GameLift"

    Returns:
        The bare message when the error has no structured details, otherwise
        a "[<api_type> API Error] <message>" header followed by one
        "<param>: <detail>" line per detail message
    """
    if error is None:
        return ''

    fields = ErrorFields.from_error(error)

    message = fields.message
    if api_type == PLAYFAB and fields.error_message:
        message = fields.error_message
    if message is None:
        message = str(error)

    if fields.error_details is None or not isinstance(fields.error_details, Mapping):
        return message

    details = '\n'.join(_detail_lines(fields.error_details))
    return f'[{api_type} API Error] {message}\n{details}'


def handle_api_response(
    api_name: str,
    api_type: str,
    future: asyncio.Future,
    error: Any,
    result: Optional[Dict[str, Any]]
) -> None:
    """
    Log the outcome of a vendor call and settle its future.

    A non-null result always wins, even if an error is set as well.

    Args:
        api_name: Name of the operation being called
        api_type: Vendor family tag, e.g. "PlayFab" or "GameLift"
        future: Future to settle with the result or the failure
        error: Error object returned by the vendor call
        result: Result object returned by the vendor call
    """
    if future.done():
        logger.warning(f'{api_name} API call completed after its future was settled')
        return

    if result is not None:
        logger.info(f'{api_name} API call successful')
        future.set_result(result)
    elif error is not None:
        report = compile_error_report(error, api_type)
        logger.error(f'{api_name} API call failed: {report}')
        if isinstance(error, Exception):
            future.set_exception(error)
        else:
            future.set_exception(
                ApiCallError(report, api_name=api_name, api_type=api_type, error=error)
            )
    else:
        logger.error(f'{api_name} API call unxpected error: {error}')
        future.set_exception(
            ApiCallError(
                f'{api_name} returned neither a result nor an error',
                api_name=api_name,
                api_type=api_type,
                error=error,
            )
        )
