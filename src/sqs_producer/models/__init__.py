"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the value objects used by the SQS producer:
- SqsDestination: Named queue target with optional region override
- SqsMessage: Payload plus headers, properties and FIFO keys
- SendResult / BatchResultEntry: Accepted and rejected send outcomes

All models are exported here for convenient importing.
"""

from .destination import SqsDestination
from .message import SqsMessage
from .result import BatchResultEntry, SendResult

__all__ = [
    "SqsDestination",
    "SqsMessage",
    "SendResult",
    "BatchResultEntry",
]
