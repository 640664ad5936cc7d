"""
Module: test_connection_factory.py
Description: Unit tests for SqsConnectionFactory configuration.

Tests parsing of None, DSN strings, option mappings and boto3 clients
into the normalized config, the error messages for invalid input, and
context creation with lazy and eager clients.
"""

import boto3
import pytest
from unittest.mock import patch

from sqs_producer.config.settings import Settings
from sqs_producer.connection import SqsConnectionFactory
from sqs_producer.context import SqsContext
from sqs_producer.exceptions import ConfigurationError


def _expected(**overrides):
    config = {
        'key': None,
        'secret': None,
        'token': None,
        'region': None,
        'retries': 3,
        'version': '2012-11-05',
        'lazy': True,
        'endpoint': None,
    }
    config.update(overrides)
    return config


class TestConnectionFactoryConfig:
    """Test cases for configuration parsing."""

    def test_invalid_config_type(self):
        """Test unsupported config types are rejected."""
        with pytest.raises(
            ConfigurationError,
            match="The config must be either an array of options, a DSN string, None or a boto3 SQS client."
        ):
            SqsConnectionFactory(object())

    def test_unsupported_scheme(self):
        """Test DSNs with a scheme other than sqs are rejected."""
        with pytest.raises(
            ConfigurationError,
            match='The given scheme protocol "http" is not supported. It must be "sqs"'
        ):
            SqsConnectionFactory('http://example.com')

    def test_unparsable_dsn(self):
        """Test strings without a scheme are rejected."""
        with pytest.raises(ConfigurationError, match="The DSN is invalid."):
            SqsConnectionFactory('foo')

    def test_invalid_lazy_flag(self):
        """Test a non-boolean lazy flag is rejected."""
        with pytest.raises(ConfigurationError, match='The option "lazy" has an invalid value "maybe".'):
            SqsConnectionFactory('sqs:?lazy=maybe')

    @pytest.mark.parametrize("options, expected", [
        ({'lazy': 'false', 'retries': '5'}, _expected(lazy=False, retries=5)),
        ({'lazy': '1'}, _expected(lazy=True)),
        ({'lazy': 'OFF'}, _expected(lazy=False)),
        ({'retries': 7, 'lazy': True}, _expected(retries=7, lazy=True)),
    ])
    def test_option_strings_coerced(self, options, expected):
        """Test option mappings get the same coercion as DSN query values."""
        factory = SqsConnectionFactory(options)

        assert factory.config == expected

    @pytest.mark.parametrize("options, name", [
        ({'lazy': 'maybe'}, 'lazy'),
        ({'retries': 'many'}, 'retries'),
    ])
    def test_invalid_option_strings(self, options, name):
        """Test option strings that cannot be coerced are rejected."""
        with pytest.raises(ConfigurationError, match=f'The option "{name}" has an invalid value'):
            SqsConnectionFactory(options)

    def test_dsn_in_options_wins(self):
        """Test DSN values override the other options of the mapping."""
        factory = SqsConnectionFactory({'dsn': 'sqs:?lazy=1', 'lazy': 'false'})

        assert factory.config['lazy'] is True

    @pytest.mark.parametrize("config, expected", [
        (None, _expected()),
        ('sqs:', _expected()),
        ({}, _expected()),
        (
            'sqs:?key=theKey&secret=theSecret&token=theToken&lazy=0',
            _expected(key='theKey', secret='theSecret', token='theToken', lazy=False),
        ),
        (
            {'dsn': 'sqs:?key=theKey&secret=theSecret&token=theToken&lazy=0'},
            _expected(key='theKey', secret='theSecret', token='theToken', lazy=False),
        ),
        (
            {'key': 'theKey', 'secret': 'theSecret', 'token': 'theToken', 'lazy': False},
            _expected(key='theKey', secret='theSecret', token='theToken', lazy=False),
        ),
        (
            {
                'key': 'theKey',
                'secret': 'theSecret',
                'token': 'theToken',
                'lazy': False,
                'endpoint': 'http://localstack:1111',
            },
            _expected(key='theKey', secret='theSecret', token='theToken', lazy=False,
                      endpoint='http://localstack:1111'),
        ),
        (
            'sqs:?region=eu-west-1&retries=5&endpoint=http://localhost:4566',
            _expected(region='eu-west-1', retries=5, endpoint='http://localhost:4566'),
        ),
    ])
    def test_parse_configuration(self, config, expected):
        """Test every supported config form normalizes as expected."""
        factory = SqsConnectionFactory(config)

        assert factory.config == expected

    def test_boto3_client_config(self):
        """Test a ready boto3 client is used as is."""
        client = boto3.client('sqs', region_name='us-east-1')

        factory = SqsConnectionFactory(client)
        context = factory.create_context()

        assert factory.client is client
        assert context.get_client() is client

    def test_boto3_client_serves_its_own_region(self):
        """Test a ready client is reused when the override names its region."""
        client = boto3.client('sqs', region_name='us-east-1', endpoint_url='http://localhost:4566')

        context = SqsConnectionFactory(client).create_context()

        assert context.get_client('us-east-1') is client

    def test_boto3_client_rejects_other_region(self):
        """Test a ready client cannot be swapped for a default client of another region."""
        client = boto3.client('sqs', region_name='us-east-1', endpoint_url='http://localhost:4566')
        context = SqsConnectionFactory(client).create_context()

        with patch('sqs_producer.connection.boto3.client') as client_mock:
            with pytest.raises(ConfigurationError, match='The region "eu-west-1" cannot be served'):
                context.get_client('eu-west-1')

        client_mock.assert_not_called()

    def test_from_settings(self, test_settings):
        """Test settings fields map to config options."""
        settings = test_settings.model_copy(update={
            'sqs_endpoint_url': 'http://localhost:4566',
            'sqs_lazy': False,
            'delivery_delay': 1500,
        })

        factory = SqsConnectionFactory.from_settings(settings)

        assert factory.config == _expected(
            region='us-east-1', endpoint='http://localhost:4566', lazy=False
        )
        assert factory.delivery_delay == 1500

    def test_from_settings_dsn_wins(self):
        """Test sqs_dsn options override the individual fields."""
        settings = Settings(
            _env_file=None,
            aws_region='us-east-1',
            sqs_dsn='sqs:?region=eu-central-1',
        )

        factory = SqsConnectionFactory.from_settings(settings)

        assert factory.config['region'] == 'eu-central-1'

    def test_settings_reject_foreign_dsn(self):
        """Test settings validation of the DSN scheme."""
        with pytest.raises(ValueError, match="sqs_dsn must start with 'sqs:'"):
            Settings(_env_file=None, sqs_dsn='amqp://localhost')


class TestConnectionFactoryContext:
    """Test cases for context creation."""

    def test_lazy_context_defers_client(self):
        """Test no client is created until the context needs one."""
        with patch('sqs_producer.connection.boto3.client') as client_mock:
            context = SqsConnectionFactory('sqs:?region=eu-west-1').create_context()

            assert isinstance(context, SqsContext)
            client_mock.assert_not_called()

            context.get_client()
            client_mock.assert_called_once()
            assert client_mock.call_args.kwargs['region_name'] == 'eu-west-1'

    def test_eager_context_creates_client(self):
        """Test lazy=0 creates the client immediately with credentials."""
        with patch('sqs_producer.connection.boto3.client') as client_mock:
            SqsConnectionFactory(
                'sqs:?key=theKey&secret=theSecret&token=theToken&lazy=0&endpoint=http://localhost:4566'
            ).create_context()

        client_mock.assert_called_once()
        args, kwargs = client_mock.call_args
        assert args == ('sqs',)
        assert kwargs['aws_access_key_id'] == 'theKey'
        assert kwargs['aws_secret_access_key'] == 'theSecret'
        assert kwargs['aws_session_token'] == 'theToken'
        assert kwargs['endpoint_url'] == 'http://localhost:4566'
        assert kwargs['api_version'] == '2012-11-05'
        assert kwargs['config'].retries == {'max_attempts': 3, 'mode': 'standard'}

    def test_region_override_client(self):
        """Test region clients are built with the factory's config."""
        with patch('sqs_producer.connection.boto3.client') as client_mock:
            context = SqsConnectionFactory('sqs:?region=us-east-1').create_context()
            context.get_client('ap-southeast-2')

        assert client_mock.call_args.kwargs['region_name'] == 'ap-southeast-2'

    def test_delivery_delay_reaches_producer(self):
        """Test the factory delay becomes the producers' default."""
        with patch('sqs_producer.connection.boto3.client'):
            context = SqsConnectionFactory(None, delivery_delay=4000).create_context()

        assert context.create_producer().get_delivery_delay() == 4000
