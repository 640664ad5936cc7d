"""
Module: result.py
Description: Send outcome models.

SendResult describes a message SQS accepted; BatchResultEntry describes
a batch entry SQS rejected. Both are built from the boto3 response dicts.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SendResult(BaseModel):
    """
    Accepted message.

    Attributes:
        id: Batch entry correlation id (None for single sends)
        message_id: Provider-assigned message id
        sequence_number: Sequence number (FIFO queues only)
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    message_id: str
    sequence_number: Optional[str] = None

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "SendResult":
        return cls(
            id=response.get("Id"),
            message_id=response["MessageId"],
            sequence_number=response.get("SequenceNumber"),
        )


class BatchResultEntry(BaseModel):
    """
    Rejected batch entry, as reported in the 'Failed' list.

    Attributes:
        id: Batch entry correlation id
        code: Error code
        message: Error message, if SQS gave one
        sender_fault: Whether the error was caused by the request
    """

    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    message: Optional[str] = None
    sender_fault: bool = Field(default=False)

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "BatchResultEntry":
        return cls(
            id=response["Id"],
            code=response["Code"],
            message=response.get("Message"),
            sender_fault=response.get("SenderFault", False),
        )

    def to_wire(self) -> Dict[str, Any]:
        """Return the entry in SQS field names and order."""
        return {
            "Code": self.code,
            "Id": self.id,
            "Message": self.message,
            "SenderFault": self.sender_fault,
        }
