"""
Module: exceptions.py
Description: Exception hierarchy for the SQS producer.

All errors raised by the producer, the argument builder, the context and
the connection factory derive from SqsProducerError. Errors are surfaced
to the immediate caller; nothing in this package retries or swallows them.

Key Components:
- SqsProducerError: Base exception carrying a message and details
- InvalidDestination / InvalidMessage: Caller bugs, non-retryable
- UnsupportedCapability: Priority or time-to-live requested
- SendFailed / BatchPartialFailure: Transport did not accept the message(s)
- ResolutionError: Destination could not be mapped to a queue URL
- ConfigurationError: Connection config could not be parsed

Dependencies: json, typing
Author: SQS Producer Team
"""

import json
from typing import Any, Dict, List, Optional


class SqsProducerError(Exception):
    """
    Base exception for SQS producer errors.

    Attributes:
        message: Human readable error message
        details: Structured context for logging and correlation
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidDestination(SqsProducerError, TypeError):
    """Raised when a destination is not an SqsDestination."""

    @classmethod
    def assert_destination_instance_of(cls, destination: Any, expected: type) -> None:
        if not isinstance(destination, expected):
            raise cls(
                f"The destination must be an instance of {expected.__name__} "
                f"but got {type(destination).__name__}.",
                details={"destination_type": type(destination).__name__},
            )


class InvalidMessage(SqsProducerError, ValueError):
    """Raised when a message is not an SqsMessage or has an empty body."""

    @classmethod
    def assert_message_instance_of(cls, message: Any, expected: type) -> None:
        if not isinstance(message, expected):
            raise cls(
                f"The message must be an instance of {expected.__name__} "
                f"but got {type(message).__name__}.",
                details={"message_type": type(message).__name__},
            )


class UnsupportedCapability(SqsProducerError):
    """Raised when a feature SQS has no concept of is requested."""

    capability = "capability"

    @classmethod
    def provider_does_not_support_it(cls) -> "UnsupportedCapability":
        return cls(
            f"The provider does not support {cls.capability} feature",
            details={"capability": cls.capability},
        )


class PriorityNotSupported(UnsupportedCapability):
    """Raised by set_priority for any non-null priority."""

    capability = "priority"


class TimeToLiveNotSupported(UnsupportedCapability):
    """Raised by set_time_to_live for any non-null time to live."""

    capability = "time to live"


class SendFailed(SqsProducerError, RuntimeError):
    """Raised when SQS did not accept a message or the transport call failed."""


class BatchPartialFailure(SendFailed):
    """
    Raised when one or more entries of a batch send were rejected.

    The message embeds every failed entry (Code, Id, Message, SenderFault)
    in the order the messages were passed to send_all.

    Attributes:
        failed: Failed entries in caller order
        successful: Entries SQS accepted, in caller order
    """

    def __init__(self, failed: List[Any], successful: Optional[List[Any]] = None):
        self.failed = list(failed)
        self.successful = list(successful or [])

        encoded = json.dumps(
            [entry.to_wire() for entry in self.failed],
            separators=(",", ":"),
        )
        super().__init__(
            f"Messages were not sent: {encoded}",
            details={
                "failed_count": len(self.failed),
                "successful_count": len(self.successful),
            },
        )


class ResolutionError(SqsProducerError):
    """Raised when a destination cannot be mapped to a queue URL."""


class ConfigurationError(SqsProducerError, ValueError):
    """Raised when the connection configuration is invalid."""
