"""
Module: conftest.py
Description: Shared pytest fixtures for SQS producer tests.

Provides mocked boto3 SQS clients for exact request assertions, sample
destinations and messages, and a moto-backed SQS client for tests that
exercise a real boto3 client against an in-memory queue service.
"""

import pytest
import boto3
from unittest.mock import Mock
from moto import mock_aws

from sqs_producer.config.settings import Settings
from sqs_producer.context import SqsContext
from sqs_producer.models import SqsDestination, SqsMessage
from sqs_producer.producer import SqsProducer


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """
    Provide fake AWS credentials.

    Keeps boto3 from picking up real credentials or config during tests.
    """
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def test_settings():
    """
    Provide test configuration settings.

    Disables .env loading for predictable tests.
    """
    return Settings(_env_file=None, log_level="DEBUG", aws_region="us-east-1")


@pytest.fixture
def sqs_client():
    """
    Provide a mocked boto3 SQS client.

    get_queue_url resolves every name to 'theQueueUrl'; send_message
    and send_message_batch are left for each test to configure.
    """
    client = Mock(name="sqs_client")
    client.get_queue_url.return_value = {"QueueUrl": "theQueueUrl"}
    return client


@pytest.fixture
def context(sqs_client):
    """Provide an SqsContext bound to the mocked client."""
    return SqsContext(client=sqs_client)


@pytest.fixture
def producer(context):
    """Provide an SqsProducer without a delivery delay."""
    return SqsProducer(context)


@pytest.fixture
def destination():
    """Provide a standard queue destination."""
    return SqsDestination(name="queue-name")


@pytest.fixture
def sample_message():
    """
    Provide a fully populated message.

    Carries headers, properties, a per-message delay and both FIFO keys.
    """
    return SqsMessage(
        body="theBody",
        properties={"key": "value"},
        headers={"hkey": "hvaleu"},
        delay_seconds=12345,
        message_deduplication_id="theDeduplicationId",
        message_group_id="groupId",
    )


@pytest.fixture
def moto_sqs():
    """
    Provide a boto3 SQS client backed by moto.

    Queues created through it live only for the duration of the test.
    """
    with mock_aws():
        yield boto3.client("sqs", region_name="us-east-1")
