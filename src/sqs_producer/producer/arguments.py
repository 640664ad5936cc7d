"""
Module: arguments.py
Description: SQS request argument builder.

Pure functions mapping a queue URL and SqsMessage(s) to the keyword
arguments of boto3's send_message and send_message_batch calls.

Key Components:
- build_message_arguments(): Per-message fields shared by both calls
- build_send_arguments(): SendMessage request
- build_batch_arguments(): SendMessageBatch request (QueueUrl + Entries)
- encode_headers(): The 'Headers' attribute wire encoding

Wire contract for the 'Headers' message attribute: a compact JSON array
of exactly two objects, headers first and properties second. Consumers
decode it as [headers, properties].

Delivery delay precedence:
1. producer default (milliseconds, floored to seconds) when set
2. message.delay_seconds when truthy, replacing the default
3. otherwise DelaySeconds is omitted

Dependencies: json, uuid, dataclasses
Author: SQS Producer Team
"""

import json
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqs_producer.exceptions import InvalidMessage
from sqs_producer.models.message import SqsMessage
from sqs_producer.utils.batch_helpers import validate_batch_size


@dataclass(frozen=True)
class WireArguments:
    """
    Request ready for the transport.

    Attributes:
        params: Keyword arguments for the boto3 call
        region: Region the call must be routed to (None for the default client)
    """

    params: Dict[str, Any]
    region: Optional[str] = None


def encode_headers(headers: Dict[str, Any], properties: Dict[str, Any]) -> str:
    """
    Encode headers and properties into the 'Headers' attribute value.

    Example:
        >>> encode_headers({"hkey": "hvalue"}, {"key": "value"})
        '[{"hkey":"hvalue"},{"key":"value"}]'
    """
    return json.dumps([headers, properties], separators=(",", ":"))


def validate_message(message: Any) -> SqsMessage:
    """
    Check a message can be sent.

    Raises:
        InvalidMessage: If message is not an SqsMessage or its body is empty
    """
    InvalidMessage.assert_message_instance_of(message, SqsMessage)

    if not message.body or not isinstance(message.body, str):
        raise InvalidMessage("The message body must be a non-empty string.")

    return message


def build_message_arguments(
    message: SqsMessage,
    delivery_delay: Optional[int] = None
) -> Dict[str, Any]:
    """
    Build the per-message request fields.

    Args:
        message: Message to encode
        delivery_delay: Producer default delay in milliseconds, or None

    Returns:
        Dictionary with MessageAttributes, MessageBody and the optional
        DelaySeconds, MessageDeduplicationId and MessageGroupId keys

    Raises:
        InvalidMessage: If message is not an SqsMessage or its body is empty
    """
    body = validate_message(message).body

    arguments = {
        'MessageAttributes': {
            'Headers': {
                'DataType': 'String',
                'StringValue': encode_headers(message.headers, message.properties),
            },
        },
        'MessageBody': body,
    }

    if delivery_delay is not None:
        arguments['DelaySeconds'] = int(delivery_delay // 1000)

    if message.delay_seconds:
        arguments['DelaySeconds'] = message.delay_seconds

    if message.message_deduplication_id:
        arguments['MessageDeduplicationId'] = message.message_deduplication_id

    if message.message_group_id:
        arguments['MessageGroupId'] = message.message_group_id

    return arguments


def build_send_arguments(
    queue_url: str,
    message: SqsMessage,
    delivery_delay: Optional[int] = None,
    region: Optional[str] = None
) -> WireArguments:
    """Build the SendMessage request for one message."""
    params = {'QueueUrl': queue_url}
    params.update(build_message_arguments(message, delivery_delay))

    return WireArguments(params=params, region=region)


def build_batch_arguments(
    queue_url: str,
    messages: List[SqsMessage],
    delivery_delay: Optional[int] = None,
    region: Optional[str] = None
) -> WireArguments:
    """
    Build the SendMessageBatch request for up to ten messages.

    Each entry is keyed by the message's message_id, or by a generated
    UUID when the message has none. Entries keep the order of messages.

    Raises:
        InvalidMessage: If any message is invalid or two messages share a
            message_id (no partial request is built)
        ValueError: If more than ten messages are given
    """
    validate_batch_size(messages)

    entries = []
    for message in messages:
        entry = {'Id': _entry_id(message)}
        entry.update(build_message_arguments(message, delivery_delay))
        entries.append(entry)

    ids = [entry['Id'] for entry in entries]
    duplicates = sorted({entry_id for entry_id in ids if ids.count(entry_id) > 1})
    if duplicates:
        raise InvalidMessage(
            f"Batch entry ids must be distinct, got duplicates: {', '.join(duplicates)}.",
            details={"duplicate_ids": duplicates},
        )

    return WireArguments(
        params={'QueueUrl': queue_url, 'Entries': entries},
        region=region,
    )


def _entry_id(message: Any) -> str:
    message_id = getattr(message, 'message_id', None)
    return message_id if message_id else str(uuid.uuid4())
