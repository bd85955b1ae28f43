"""
GameLift service for game session hosting operations.

Each wrapper builds a GameLift request, runs the blocking boto3 call in the
default executor and routes the outcome through the shared response
dispatcher.
"""
import asyncio
import functools
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING, Union

import boto3
from config import get_config
from logger_config import get_logger
from utils.api_response import GAMELIFT, handle_api_response

if TYPE_CHECKING:
    from mypy_boto3_gamelift import GameLiftClient
else:
    GameLiftClient = Any

logger = get_logger(__name__)

LAUNCH_PATH_ROOT = '/local/game/'
SERVER_PARAMETERS = 'service=gamelift -NOSTEAM -core -log LOG={token}.log'

_gamelift_client: Optional[GameLiftClient] = None


def create_gamelift_client(region: Optional[str] = None) -> GameLiftClient:
    """
    Create a GameLift client.

    Args:
        region: AWS region (defaults to the configured region)

    Returns:
        boto3 GameLift client
    """
    region_name = region or get_config().aws_region
    logger.debug(f'Creating GameLift client for region {region_name}')
    return boto3.client('gamelift', region_name=region_name)


def get_gamelift_client() -> GameLiftClient:
    """Lazy initialization of the shared GameLift client."""
    global _gamelift_client
    if _gamelift_client is None:
        _gamelift_client = create_gamelift_client()
    return _gamelift_client


async def _send(
    api_name: str,
    operation: Callable[..., Dict[str, Any]],
    request: Dict[str, Any],
    extract: Callable[[Dict[str, Any]], Any]
) -> Any:
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    try:
        response = await loop.run_in_executor(None, functools.partial(operation, **request))
        result = extract(response)
    except Exception as e:
        handle_api_response(api_name, GAMELIFT, future, e, None)
    else:
        handle_api_response(api_name, GAMELIFT, future, None, result)

    return await future


async def update_runtime_configuration(
    client: GameLiftClient,
    fleet_id: str,
    idempotency_token: str,
    launch_path: str,
    concurrent_executions: int
) -> Dict[str, Any]:
    """
    Replace the server process configuration of a fleet.

    Args:
        client: GameLift client with region and credentials
        fleet_id: ID of the GameLift fleet
        idempotency_token: Token naming the server process log file
        launch_path: Game executable path relative to the game install root
        concurrent_executions: Number of server processes run simultaneously

    Returns:
        The fleet's updated RuntimeConfiguration

    Raises:
        ClientError: If GameLift rejects the request
    """
    request = {
        'FleetId': fleet_id,
        'RuntimeConfiguration': {
            'ServerProcesses': [
                {
                    'LaunchPath': f'{LAUNCH_PATH_ROOT}{launch_path}',
                    'Parameters': SERVER_PARAMETERS.format(token=idempotency_token),
                    'ConcurrentExecutions': concurrent_executions,
                }
            ]
        }
    }

    return await _send(
        'updateRuntimeConfiguration',
        client.update_runtime_configuration,
        request,
        lambda response: response['RuntimeConfiguration'],
    )


async def create_player_session(
    client: GameLiftClient,
    player_id: str,
    game_session_id: str
) -> Dict[str, Any]:
    """
    Reserve an open player slot in a game session for a player.

    Args:
        client: GameLift client with region and credentials
        player_id: ID of the player (the PlayFab ID)
        game_session_id: Full game session ARN including region and fleet

    Returns:
        The new PlayerSession, including its player session ID

    Raises:
        ClientError: If GameLift rejects the request
    """
    request = {
        'PlayerId': player_id,
        'GameSessionId': game_session_id,
    }

    return await _send(
        'createPlayerSession',
        client.create_player_session,
        request,
        lambda response: response['PlayerSession'],
    )


async def create_game_session(
    client: GameLiftClient,
    alias_id: str,
    maximum_player_session_count: int,
    game_properties: List[Dict[str, str]]
) -> Dict[str, Any]:
    """
    Create a multiplayer game session on the fleet behind an alias.

    Args:
        client: GameLift client with region and credentials
        alias_id: GameLift alias ID
        maximum_player_session_count: Maximum number of concurrent players
        game_properties: Custom properties such as map or game mode, as
            {"Key": ..., "Value": ...} dicts

    Returns:
        The new GameSession with its configuration and status

    Raises:
        ClientError: If GameLift rejects the request
    """
    request = {
        'AliasId': alias_id,
        'MaximumPlayerSessionCount': maximum_player_session_count,
        'GameProperties': game_properties,
    }

    return await _send(
        'createGameSession',
        client.create_game_session,
        request,
        lambda response: response['GameSession'],
    )


async def create_game_session_queue(
    client: GameLiftClient,
    name: str,
    destinations: List[Union[str, Dict[str, str]]]
) -> Dict[str, Any]:
    """
    Create a game session queue.

    Unlike the other wrappers this call does not go through the response
    dispatcher: it returns or raises directly and logs nothing.

    Args:
        client: GameLift client with region and credentials
        name: Name of the queue
        destinations: Fleet or alias ARNs where game sessions can be placed,
            either as plain ARNs or as {"DestinationArn": ...} dicts

    Returns:
        The new GameSessionQueue with its assigned ARN

    Raises:
        ClientError: If GameLift rejects the request
    """
    request = {
        'Name': name,
        'Destinations': [
            {'DestinationArn': destination} if isinstance(destination, str) else destination
            for destination in destinations
        ],
    }

    loop = asyncio.get_running_loop()
    response = await loop.run_in_executor(
        None, functools.partial(client.create_game_session_queue, **request)
    )
    return response['GameSessionQueue']


async def describe_game_session(
    client: GameLiftClient,
    game_session_id: str
) -> Dict[str, Any]:
    """
    Retrieve a single game session.

    Args:
        client: GameLift client with region and credentials
        game_session_id: ID of the game session to describe

    Returns:
        The matching GameSession

    Raises:
        ClientError: If GameLift rejects the request
        IndexError: If no game session matches the ID
    """
    request = {
        'GameSessionId': game_session_id,
    }

    return await _send(
        'describeGameSession',
        client.describe_game_sessions,
        request,
        lambda response: response['GameSessions'][0],
    )


async def describe_game_sessions(
    client: GameLiftClient,
    alias_id: str,
    status_filter: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Retrieve the game sessions of an alias, optionally filtered by status.

    Args:
        client: GameLift client with region and credentials
        alias_id: ID of the fleet alias to describe
        status_filter: Game session status such as "ACTIVE" (None for all)

    Returns:
        List of matching GameSessions

    Raises:
        ClientError: If GameLift rejects the request
    """
    request = {
        'AliasId': alias_id,
    }
    if status_filter is not None:
        request['StatusFilter'] = status_filter

    return await _send(
        'describeGameSessions',
        client.describe_game_sessions,
        request,
        lambda response: response['GameSessions'],
    )
