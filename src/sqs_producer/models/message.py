"""
Module: message.py
Description: Queue message model.

Defines SqsMessage, one unit of payload plus metadata to enqueue.
Headers and properties are free-form mappings that travel together in
a single 'Headers' message attribute; the FIFO keys and the per-message
delay map onto their SQS request parameters.

Dependencies: pydantic, typing
Author: SQS Producer Team
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SqsMessage(BaseModel):
    """
    Message to be sent to an SQS queue.

    The body is not validated here: an empty body is a caller error that
    the producer reports as InvalidMessage at send time.

    Attributes:
        body: Message payload (must be non-empty when sent)
        properties: Application-level metadata
        headers: Transport-level metadata
        delay_seconds: Per-message delay, overrides the producer default
        message_deduplication_id: Deduplication key for FIFO queues
        message_group_id: Ordering key for FIFO queues
        message_id: Correlation key for batch entries, never sent as an
            ordering key
    """

    model_config = ConfigDict(validate_assignment=True)

    body: Optional[str] = Field(
        default="",
        description="Message payload"
    )
    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Application-level metadata"
    )
    headers: Dict[str, Any] = Field(
        default_factory=dict,
        description="Transport-level metadata"
    )
    delay_seconds: Optional[int] = Field(
        default=None,
        ge=0,
        description="Per-message delivery delay in seconds"
    )
    message_deduplication_id: Optional[str] = Field(
        default=None,
        description="Deduplication id (FIFO queues only)"
    )
    message_group_id: Optional[str] = Field(
        default=None,
        description="Group id (FIFO queues only)"
    )
    message_id: Optional[str] = Field(
        default=None,
        description="Batch entry correlation id"
    )

    def get_header(self, name: str, default: Any = None) -> Any:
        return self.headers.get(name, default)

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)
