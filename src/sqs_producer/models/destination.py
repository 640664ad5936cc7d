"""
Module: destination.py
Description: Queue destination value object.

An SqsDestination names the queue a message is sent to. The queue URL
is not stored here: SqsContext resolves it from the name (and optional
region override) on first use and caches it.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SqsDestination(BaseModel):
    """
    Named SQS queue target.

    An empty name is accepted at construction and only rejected when the
    context has to resolve it to a queue URL.

    Attributes:
        name: Queue name (e.g. 'orders' or 'orders.fifo')
        region: Optional region override; routes the send to a client
            for that region instead of the context's default client
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="",
        description="Queue name"
    )
    region: Optional[str] = Field(
        default=None,
        description="Region override for this queue"
    )

    @property
    def queue_name(self) -> str:
        return self.name

    @property
    def is_fifo(self) -> bool:
        """FIFO queue names end with '.fifo'."""
        return self.name.endswith(".fifo")
