"""
Module: connection.py
Description: Connection factory turning SQS configuration into contexts.

Accepts None, a DSN string, a mapping of options or a ready boto3 SQS
client, normalizes it into a config dictionary and creates SqsContext
instances from it.

DSN format:
    sqs:?key=KEY&secret=SECRET&token=TOKEN&region=REGION&retries=3&endpoint=URL&lazy=0

Dependencies: boto3, botocore, urllib
Author: SQS Producer Team
"""

from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qs, urlsplit

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from sqs_producer.config.settings import Settings
from sqs_producer.context import SqsContext
from sqs_producer.exceptions import ConfigurationError
from sqs_producer.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG = {
    'key': None,
    'secret': None,
    'token': None,
    'region': None,
    'retries': 3,
    'version': '2012-11-05',
    'lazy': True,
    'endpoint': None,
}

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


class SqsConnectionFactory:
    """
    Factory for SqsContext instances.

    Attributes:
        config: Normalized configuration dictionary
        delivery_delay: Default delivery delay (ms) for created producers

    Example:
        >>> factory = SqsConnectionFactory('sqs:?region=eu-west-1&lazy=0')
        >>> context = factory.create_context()
    """

    def __init__(self, config: Any = None, delivery_delay: Optional[int] = None):
        """
        Initialize the connection factory.

        Args:
            config: None, DSN string, mapping of options or boto3 SQS client
            delivery_delay: Default delivery delay in milliseconds

        Raises:
            ConfigurationError: If config is of an unsupported type or the
                DSN cannot be parsed
        """
        self.client = None
        self.delivery_delay = delivery_delay

        if isinstance(config, BaseClient):
            self.client = config
            config = {}
        elif config is None:
            config = self.parse_dsn('sqs:')
        elif isinstance(config, str):
            config = self.parse_dsn(config)
        elif isinstance(config, Mapping):
            config = dict(config)
            dsn = config.pop('dsn', None)
            config = _normalize_options(config)
            if dsn is not None:
                config.update(self.parse_dsn(dsn))
        else:
            raise ConfigurationError(
                'The config must be either an array of options, a DSN string, '
                'None or a boto3 SQS client.'
            )

        self.config = {**DEFAULT_CONFIG, **config}

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqsConnectionFactory":
        """Build a factory from application settings; sqs_dsn wins over fields."""
        config = {
            'region': settings.aws_region,
            'endpoint': settings.sqs_endpoint_url,
            'retries': settings.sqs_retries,
            'lazy': settings.sqs_lazy,
        }
        if settings.sqs_dsn:
            config['dsn'] = settings.sqs_dsn

        return cls(config, delivery_delay=settings.delivery_delay)

    @staticmethod
    def parse_dsn(dsn: str) -> Dict[str, Any]:
        """
        Parse an sqs: DSN into config options.

        Only options present in the query string are returned.

        Raises:
            ConfigurationError: If the DSN is invalid or its scheme is not 'sqs'
        """
        parts = urlsplit(dsn)
        if not parts.scheme:
            raise ConfigurationError('The DSN is invalid.')

        if parts.scheme != 'sqs':
            raise ConfigurationError(
                f'The given scheme protocol "{parts.scheme}" is not supported. It must be "sqs"'
            )

        query = {name: values[-1] for name, values in parse_qs(parts.query, keep_blank_values=True).items()}

        config = {}
        for name in ('key', 'secret', 'token', 'region', 'version', 'endpoint', 'retries', 'lazy'):
            if name in query:
                config[name] = query[name]

        return _normalize_options(config)

    def create_context(self) -> SqsContext:
        """
        Create an SqsContext.

        With lazy enabled the boto3 client is created on first use.
        """
        if self.client is not None:
            return SqsContext(
                client=self.client,
                client_factory=self._client_for_region,
                delivery_delay=self.delivery_delay
            )

        if self.config['lazy']:
            return SqsContext(
                client_loader=self._create_client,
                client_factory=self._create_client,
                delivery_delay=self.delivery_delay
            )

        return SqsContext(
            client=self._create_client(),
            client_factory=self._create_client,
            delivery_delay=self.delivery_delay
        )

    def _client_for_region(self, region: str) -> Any:
        """
        Return the ready client for its own region.

        A client passed in as config carries its own endpoint and
        credentials, which cannot be copied to a client for another region.

        Raises:
            ConfigurationError: If region differs from the client's region
        """
        if region == self.client.meta.region_name:
            return self.client

        raise ConfigurationError(
            f'The region "{region}" cannot be served by the given boto3 client '
            f'(region "{self.client.meta.region_name}"). Region overrides need a '
            'factory built from a DSN or options.',
            details={'region': region, 'client_region': self.client.meta.region_name},
        )

    def _create_client(self, region: Optional[str] = None) -> Any:
        kwargs = {
            'region_name': region or self.config['region'],
            'api_version': self.config['version'],
            'endpoint_url': self.config['endpoint'],
            'config': Config(retries={'max_attempts': self.config['retries'], 'mode': 'standard'}),
        }

        if self.config['key'] and self.config['secret']:
            kwargs['aws_access_key_id'] = self.config['key']
            kwargs['aws_secret_access_key'] = self.config['secret']
            kwargs['aws_session_token'] = self.config['token']

        logger.info(
            "Creating SQS client",
            region=kwargs['region_name'],
            endpoint_url=kwargs['endpoint_url']
        )

        return boto3.client('sqs', **kwargs)


def _normalize_options(config: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce string 'retries' and 'lazy' values, as found in DSN queries."""
    config = dict(config)

    retries = config.get('retries')
    if isinstance(retries, str):
        try:
            config['retries'] = int(retries)
        except ValueError as e:
            raise _invalid_option('retries', retries) from e

    lazy = config.get('lazy')
    if isinstance(lazy, str):
        lowered = lazy.strip().lower()
        if lowered in _TRUE_VALUES:
            config['lazy'] = True
        elif lowered in _FALSE_VALUES:
            config['lazy'] = False
        else:
            raise _invalid_option('lazy', lazy)

    return config


def _invalid_option(name: str, value: Any) -> ConfigurationError:
    return ConfigurationError(
        f'The option "{name}" has an invalid value "{value}".',
        details={name: value},
    )
