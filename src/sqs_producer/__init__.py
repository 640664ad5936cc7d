"""
Package: sqs_producer
Description: Producer-side adapter for Amazon SQS.

Translates queue messages into SQS SendMessage / SendMessageBatch
arguments and interprets the responses into results or errors.

Typical use:
    >>> factory = SqsConnectionFactory('sqs:?region=us-east-1')
    >>> context = factory.create_context()
    >>> producer = context.create_producer()
    >>> producer.send(context.create_queue('orders'), context.create_message('hello'))
"""

from .connection import SqsConnectionFactory
from .context import SqsContext
from .exceptions import (
    BatchPartialFailure,
    ConfigurationError,
    InvalidDestination,
    InvalidMessage,
    PriorityNotSupported,
    ResolutionError,
    SendFailed,
    SqsProducerError,
    TimeToLiveNotSupported,
    UnsupportedCapability,
)
from .models import BatchResultEntry, SendResult, SqsDestination, SqsMessage
from .producer import SqsProducer

__all__ = [
    "SqsConnectionFactory",
    "SqsContext",
    "SqsProducer",
    "SqsDestination",
    "SqsMessage",
    "SendResult",
    "BatchResultEntry",
    "SqsProducerError",
    "InvalidDestination",
    "InvalidMessage",
    "UnsupportedCapability",
    "PriorityNotSupported",
    "TimeToLiveNotSupported",
    "SendFailed",
    "BatchPartialFailure",
    "ResolutionError",
    "ConfigurationError",
]
