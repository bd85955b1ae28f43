"""
Tests for the GameLift wrappers.

Request and response shapes are checked against the real GameLift service
model with botocore's Stubber.
"""
import boto3
import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError
from botocore.stub import Stubber
import services.gamelift_service as gamelift_service
from services.gamelift_service import (
    create_game_session,
    create_game_session_queue,
    create_gamelift_client,
    create_player_session,
    describe_game_session,
    describe_game_sessions,
    get_gamelift_client,
    update_runtime_configuration,
)

GAME_SESSION_ARN = 'arn:aws:gamelift:us-east-1::gamesession/fleet-1234/gsess-5678'
QUEUE_ARN = 'arn:aws:gamelift:us-east-1:123456789012:gamesessionqueue/arena'
ALIAS_ARN = 'arn:aws:gamelift:us-east-1:123456789012:alias/alias-1234'


@pytest.fixture
def client():
    """GameLift client with dummy credentials."""
    return boto3.client(
        'gamelift',
        region_name='us-east-1',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


@pytest.fixture
def stubber(client):
    """Activated Stubber for the GameLift client."""
    with Stubber(client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def mock_logger():
    """Patch the dispatcher logger."""
    with patch('utils.api_response.logger') as logger:
        yield logger


class TestClientFactory:
    """Tests for GameLift client construction."""

    @patch('services.gamelift_service.boto3')
    def test_create_client_with_region(self, mock_boto3):
        """Test the given region is passed to boto3."""
        create_gamelift_client('eu-west-1')
        mock_boto3.client.assert_called_once_with('gamelift', region_name='eu-west-1')

    @patch('services.gamelift_service.get_config')
    @patch('services.gamelift_service.boto3')
    def test_create_client_default_region(self, mock_boto3, mock_get_config):
        """Test the configured region is used when none is given."""
        mock_get_config.return_value = Mock(aws_region='ap-southeast-2')
        create_gamelift_client()
        mock_boto3.client.assert_called_once_with('gamelift', region_name='ap-southeast-2')

    @patch('services.gamelift_service.create_gamelift_client')
    def test_get_client_lazy_init(self, mock_create, monkeypatch):
        """Test the shared client is created once."""
        monkeypatch.setattr(gamelift_service, '_gamelift_client', None)
        mock_client = Mock()
        mock_create.return_value = mock_client

        assert get_gamelift_client() is mock_client
        assert get_gamelift_client() is mock_client
        mock_create.assert_called_once_with()


class TestUpdateRuntimeConfiguration:
    """Tests for update_runtime_configuration."""

    @pytest.mark.asyncio
    async def test_success(self, client, stubber, mock_logger):
        """Test the server process is built from the launch path and token."""
        runtime_configuration = {
            'ServerProcesses': [
                {
                    'LaunchPath': '/local/game/Arena/Server.sh',
                    'Parameters': 'service=gamelift -NOSTEAM -core -log LOG=token-1.log',
                    'ConcurrentExecutions': 2,
                }
            ]
        }
        stubber.add_response(
            'update_runtime_configuration',
            {'RuntimeConfiguration': runtime_configuration},
            {'FleetId': 'fleet-1234', 'RuntimeConfiguration': runtime_configuration},
        )

        result = await update_runtime_configuration(
            client, 'fleet-1234', 'token-1', 'Arena/Server.sh', 2
        )

        assert result == runtime_configuration
        mock_logger.info.assert_called_once_with('updateRuntimeConfiguration API call successful')


class TestCreatePlayerSession:
    """Tests for create_player_session."""

    @pytest.mark.asyncio
    async def test_success(self, client, stubber, mock_logger):
        """Test the player session is returned unchanged."""
        player_session = {
            'PlayerSessionId': 'psess-1',
            'PlayerId': 'player-1',
            'GameSessionId': GAME_SESSION_ARN,
            'Status': 'RESERVED',
        }
        stubber.add_response(
            'create_player_session',
            {'PlayerSession': player_session},
            {'PlayerId': 'player-1', 'GameSessionId': GAME_SESSION_ARN},
        )

        result = await create_player_session(client, 'player-1', GAME_SESSION_ARN)

        assert result == player_session
        mock_logger.info.assert_called_once_with('createPlayerSession API call successful')

    @pytest.mark.asyncio
    async def test_client_error(self, client, stubber, mock_logger):
        """Test a service error is logged and raised unchanged."""
        stubber.add_client_error(
            'create_player_session',
            service_error_code='InvalidGameSessionStatusException',
            service_message='Game session is not accepting players',
            http_status_code=400,
        )

        with pytest.raises(ClientError) as exc_info:
            await create_player_session(client, 'player-1', GAME_SESSION_ARN)

        assert exc_info.value.response['Error']['Code'] == 'InvalidGameSessionStatusException'
        mock_logger.error.assert_called_once_with(
            'createPlayerSession API call failed: Game session is not accepting players'
        )


class TestCreateGameSession:
    """Tests for create_game_session."""

    @pytest.mark.asyncio
    async def test_success(self, client, stubber, mock_logger):
        """Test game properties are forwarded as given."""
        game_properties = [{'Key': 'map', 'Value': 'dunes'}, {'Key': 'mode', 'Value': 'ctf'}]
        game_session = {
            'GameSessionId': GAME_SESSION_ARN,
            'MaximumPlayerSessionCount': 16,
            'Status': 'ACTIVATING',
            'GameProperties': game_properties,
        }
        stubber.add_response(
            'create_game_session',
            {'GameSession': game_session},
            {
                'AliasId': 'alias-1234',
                'MaximumPlayerSessionCount': 16,
                'GameProperties': game_properties,
            },
        )

        result = await create_game_session(client, 'alias-1234', 16, game_properties)

        assert result == game_session
        mock_logger.info.assert_called_once_with('createGameSession API call successful')


class TestCreateGameSessionQueue:
    """Tests for create_game_session_queue."""

    @pytest.mark.asyncio
    async def test_success_skips_dispatcher(self, client, stubber, mock_logger):
        """Test plain ARNs become destinations and nothing is logged."""
        queue = {'Name': 'arena', 'GameSessionQueueArn': QUEUE_ARN}
        stubber.add_response(
            'create_game_session_queue',
            {'GameSessionQueue': queue},
            {'Name': 'arena', 'Destinations': [{'DestinationArn': ALIAS_ARN}]},
        )

        result = await create_game_session_queue(client, 'arena', [ALIAS_ARN])

        assert result == queue
        mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_destination_dicts_kept(self, client, stubber, mock_logger):
        """Test destination dicts are passed through untouched."""
        queue = {'Name': 'arena', 'GameSessionQueueArn': QUEUE_ARN}
        stubber.add_response(
            'create_game_session_queue',
            {'GameSessionQueue': queue},
            {'Name': 'arena', 'Destinations': [{'DestinationArn': ALIAS_ARN}]},
        )

        result = await create_game_session_queue(
            client, 'arena', [{'DestinationArn': ALIAS_ARN}]
        )

        assert result == queue

    @pytest.mark.asyncio
    async def test_error_raised_directly(self, client, stubber, mock_logger):
        """Test a service error is raised without a log line."""
        stubber.add_client_error(
            'create_game_session_queue',
            service_error_code='LimitExceededException',
            service_message='Queue limit reached',
            http_status_code=400,
        )

        with pytest.raises(ClientError):
            await create_game_session_queue(client, 'arena', [ALIAS_ARN])

        mock_logger.error.assert_not_called()


class TestDescribeGameSession:
    """Tests for describe_game_session."""

    @pytest.mark.asyncio
    async def test_returns_first_session(self, client, stubber, mock_logger):
        """Test the first matching session is returned."""
        game_session = {'GameSessionId': GAME_SESSION_ARN, 'Status': 'ACTIVE'}
        stubber.add_response(
            'describe_game_sessions',
            {'GameSessions': [game_session]},
            {'GameSessionId': GAME_SESSION_ARN},
        )

        result = await describe_game_session(client, GAME_SESSION_ARN)

        assert result == game_session
        mock_logger.info.assert_called_once_with('describeGameSession API call successful')

    @pytest.mark.asyncio
    async def test_no_session_fails(self, client, stubber, mock_logger):
        """Test an empty response is routed as a failure."""
        stubber.add_response(
            'describe_game_sessions',
            {'GameSessions': []},
            {'GameSessionId': GAME_SESSION_ARN},
        )

        with pytest.raises(IndexError):
            await describe_game_session(client, GAME_SESSION_ARN)

        logged = mock_logger.error.call_args[0][0]
        assert logged.startswith('describeGameSession API call failed: ')


class TestDescribeGameSessions:
    """Tests for describe_game_sessions."""

    @pytest.mark.asyncio
    async def test_with_status_filter(self, client, stubber, mock_logger):
        """Test the status filter is sent and all sessions are returned."""
        sessions = [
            {'GameSessionId': GAME_SESSION_ARN, 'Status': 'ACTIVE'},
            {'GameSessionId': GAME_SESSION_ARN + '-2', 'Status': 'ACTIVE'},
        ]
        stubber.add_response(
            'describe_game_sessions',
            {'GameSessions': sessions},
            {'AliasId': 'alias-1234', 'StatusFilter': 'ACTIVE'},
        )

        result = await describe_game_sessions(client, 'alias-1234', 'ACTIVE')

        assert result == sessions
        mock_logger.info.assert_called_once_with('describeGameSessions API call successful')

    @pytest.mark.asyncio
    async def test_without_status_filter(self, client, stubber, mock_logger):
        """Test no StatusFilter is sent when none is given."""
        stubber.add_response(
            'describe_game_sessions',
            {'GameSessions': []},
            {'AliasId': 'alias-1234'},
        )

        result = await describe_game_sessions(client, 'alias-1234')

        assert result == []
