"""
PlayFab service for player data and live-ops operations.

The PlayFab SDK is configured globally through PlayFabSettings and reports
every call through a ``callback(result, error)``. Each wrapper runs the
blocking SDK call in the default executor and hands the callback's outcome
pair to the shared response dispatcher on the event loop.
"""
import asyncio
from typing import Any, Callable, Dict, Iterable, Optional, Union

from playfab import (
    PlayFabAdminAPI,
    PlayFabAuthenticationAPI,
    PlayFabServerAPI,
    PlayFabSettings,
)
from config import get_config
from logger_config import get_logger
from utils.api_response import PLAYFAB, handle_api_response

logger = get_logger(__name__)


def configure_playfab(
    title_id: Optional[str] = None,
    developer_secret_key: Optional[str] = None
) -> None:
    """
    Point the PlayFab SDK at a title.

    Args:
        title_id: PlayFab title ID (defaults to PLAYFAB_TITLE_ID)
        developer_secret_key: Title secret key for server and admin calls
            (defaults to PLAYFAB_DEVELOPER_SECRET_KEY)

    Raises:
        ValueError: If no title ID is given or configured
    """
    config = get_config()
    title_id = title_id or config.playfab_title_id
    if not title_id:
        raise ValueError("PLAYFAB_TITLE_ID environment variable is required")

    PlayFabSettings.TitleId = title_id
    PlayFabSettings.DeveloperSecretKey = (
        developer_secret_key or config.playfab_developer_secret_key
    )
    logger.info(f'PlayFab SDK configured for title {title_id}')


async def _call(
    api_name: str,
    operation: Callable[..., None],
    request: Dict[str, Any]
) -> Any:
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def dispatch(error, result):
        try:
            handle_api_response(api_name, PLAYFAB, future, error, result)
        except Exception as e:
            if not future.done():
                future.set_exception(e)

    def callback(result, error):
        loop.call_soon_threadsafe(dispatch, error, result)

    try:
        await loop.run_in_executor(None, operation, request, callback)
    except Exception as e:
        # Transport failures raised inside the SDK never reach the callback
        dispatch(e, None)

    return await future


async def authenticate_session_ticket(session_ticket: str) -> Dict[str, Any]:
    """
    Validate a client's session ticket and return details for that user.

    Args:
        session_ticket: Session ticket issued by a PlayFab client login API

    Returns:
        AuthenticateSessionTicketResult

    Raises:
        ApiCallError: If PlayFab rejects the ticket
    """
    request = {'SessionTicket': session_ticket}
    return await _call(
        'authenticateSessionTicket', PlayFabServerAPI.AuthenticateSessionTicket, request
    )


async def get_entity_token() -> Dict[str, Any]:
    """Exchange the title secret key for an entity token."""
    return await _call('getEntityToken', PlayFabAuthenticationAPI.GetEntityToken, {})


async def validate_entity_token(entity_token: str) -> Dict[str, Any]:
    """
    Validate a client provided entity token. Only callable by the title entity.

    Args:
        entity_token: Client entity token

    Returns:
        ValidateEntityTokenResponse
    """
    request = {'EntityToken': entity_token}
    return await _call(
        'validateEntityToken', PlayFabAuthenticationAPI.ValidateEntityToken, request
    )


async def get_leaderboard_around_user(
    play_fab_id: str,
    statistic_name: str
) -> Dict[str, Any]:
    """
    Retrieve the leaderboard entry of a single user for a statistic.

    Args:
        play_fab_id: PlayFab ID of the user
        statistic_name: Title-specific statistic backing the leaderboard

    Returns:
        GetLeaderboardAroundUserResult holding the user's entry
    """
    request = {
        'PlayFabId': play_fab_id,
        'MaxResultsCount': 1,
        'StatisticName': statistic_name,
    }
    return await _call(
        'getLeaderboardAroundUser', PlayFabServerAPI.GetLeaderboardAroundUser, request
    )


async def get_title_data(keys: Union[str, Iterable[str], None] = None) -> Dict[str, Any]:
    """
    Retrieve title data key-value pairs readable by the client.

    Args:
        keys: A key or an iterable of keys to fetch (None fetches all keys)

    Returns:
        GetTitleDataResult with the requested keys under "Data"
    """
    request = {}
    if keys is not None:
        request['Keys'] = [keys] if isinstance(keys, str) else list(keys)
    return await _call('getTitleData', PlayFabServerAPI.GetTitleData, request)


async def list_virtual_currency_types() -> Dict[str, Any]:
    """Return all virtual currencies defined for the title."""
    return await _call(
        'listVirtualCurrencyTypes', PlayFabAdminAPI.ListVirtualCurrencyTypes, {}
    )


async def add_user_virtual_currency(
    play_fab_id: str,
    virtual_currency: str,
    amount: int
) -> Dict[str, Any]:
    """
    Increment a user's virtual currency balance.

    Args:
        play_fab_id: PlayFab ID of the user
        virtual_currency: Currency code to add to
        amount: Amount to add

    Returns:
        ModifyUserVirtualCurrencyResult with the balance change and new balance
    """
    request = {
        'PlayFabId': play_fab_id,
        'VirtualCurrency': virtual_currency,
        'Amount': amount,
    }
    return await _call(
        f'addUserVirtualCurrency ({virtual_currency})',
        PlayFabServerAPI.AddUserVirtualCurrency,
        request,
    )


async def subtract_user_virtual_currency(
    play_fab_id: str,
    virtual_currency: str,
    amount: int
) -> Dict[str, Any]:
    """
    Decrement a user's virtual currency balance.

    Args:
        play_fab_id: PlayFab ID of the user
        virtual_currency: Currency code to subtract from
        amount: Amount to subtract

    Returns:
        ModifyUserVirtualCurrencyResult with the balance change and new balance
    """
    request = {
        'PlayFabId': play_fab_id,
        'VirtualCurrency': virtual_currency,
        'Amount': amount,
    }
    return await _call(
        f'subtractUserVirtualCurrency ({virtual_currency})',
        PlayFabServerAPI.SubtractUserVirtualCurrency,
        request,
    )


async def update_player_statistics(
    play_fab_id: str,
    statistic_name: str,
    value: int
) -> Dict[str, Any]:
    """
    Set the value of a title-specific statistic for a user.

    Args:
        play_fab_id: PlayFab ID of the user
        statistic_name: Name of the statistic
        value: New statistic value

    Returns:
        UpdatePlayerStatisticsResult (empty on success)
    """
    request = {
        'PlayFabId': play_fab_id,
        'Statistics': [
            {
                'StatisticName': statistic_name,
                'Value': value,
            }
        ],
    }
    return await _call(
        'updatePlayerStatistics', PlayFabServerAPI.UpdatePlayerStatistics, request
    )
