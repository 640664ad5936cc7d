"""
Module: producer.py
Description: SQS producer for single and batch sends.

Validates destinations and messages, builds request arguments, calls the
boto3 SQS client of the bound context and turns the response into
SendResult objects or a domain error.

Key Components:
- SqsProducer: send(), send_all(), delivery delay accessors
- Priority and time-to-live setters that reject any non-null value

Batch policy is all-or-nothing: when any entry of send_all is rejected,
BatchPartialFailure is raised once every chunk has been sent, listing
every failed entry in caller order. Accepted entries are attached to the
exception but not returned.

Transport failures are not retried here.

Dependencies: botocore, typing
Author: SQS Producer Team
"""

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from sqs_producer.exceptions import (
    BatchPartialFailure,
    InvalidDestination,
    PriorityNotSupported,
    SendFailed,
    TimeToLiveNotSupported,
)
from sqs_producer.models.destination import SqsDestination
from sqs_producer.models.message import SqsMessage
from sqs_producer.models.result import BatchResultEntry, SendResult
from sqs_producer.producer.arguments import (
    WireArguments,
    build_batch_arguments,
    build_send_arguments,
    validate_message,
)
from sqs_producer.utils.batch_helpers import MAX_BATCH_SIZE, chunk_list
from sqs_producer.utils.logger import get_logger

if TYPE_CHECKING:
    from sqs_producer.context import SqsContext

logger = get_logger(__name__)


class SqsProducer:
    """
    Producer bound to an SqsContext.

    The delivery delay is the only mutable state. Sharing one producer
    between threads that change the delay needs external locking.

    Attributes:
        context: SqsContext providing clients and queue URLs

    Example:
        >>> producer = context.create_producer().set_delivery_delay(5000)
        >>> result = producer.send(context.create_queue("orders"), SqsMessage(body="..."))
        >>> result.message_id
        '5fea7756-0ea4-451a-a703-a558b933e274'
    """

    def __init__(self, context: "SqsContext", delivery_delay: Optional[int] = None):
        self.context = context
        self._delivery_delay = None
        self.set_delivery_delay(delivery_delay)

    def send(self, destination: SqsDestination, message: SqsMessage) -> SendResult:
        """
        Send one message.

        Args:
            destination: Target queue
            message: Message to send

        Returns:
            SendResult with the provider-assigned message id

        Raises:
            InvalidDestination: If destination is not an SqsDestination
            InvalidMessage: If message is not an SqsMessage or has an empty body
            ResolutionError: If the queue URL cannot be resolved
            SendFailed: If SQS did not return a MessageId or the call failed
        """
        InvalidDestination.assert_destination_instance_of(destination, SqsDestination)

        # Validate the body before resolving the queue URL
        validate_message(message)

        queue_url = self.context.get_queue_url(destination)
        arguments = build_send_arguments(
            queue_url,
            message,
            self._delivery_delay,
            region=destination.region,
        )

        response = self._call('send_message', arguments)

        if 'MessageId' not in response:
            logger.error(
                "SQS response has no MessageId",
                queue_url=queue_url,
                response_keys=sorted(response.keys())
            )
            raise SendFailed("Message was not sent", details={"queue_url": queue_url})

        result = SendResult.from_response(response)

        logger.info(
            "Message sent to SQS",
            message_id=result.message_id,
            queue_url=queue_url
        )

        return result

    def send_all(
        self,
        destination: SqsDestination,
        messages: Iterable[SqsMessage]
    ) -> List[SendResult]:
        """
        Send messages with SendMessageBatch, ten entries per call.

        Every message is validated before the first call is made.

        Args:
            destination: Target queue
            messages: Messages to send, in the order results are wanted

        Returns:
            SendResult per message, in the order of messages

        Raises:
            InvalidDestination: If destination is not an SqsDestination
            InvalidMessage: If any message is invalid
            SendFailed: If a batch call failed at the transport level
            BatchPartialFailure: If SQS rejected one or more entries
        """
        InvalidDestination.assert_destination_instance_of(destination, SqsDestination)

        messages = list(messages)
        if not messages:
            return []

        for message in messages:
            validate_message(message)

        queue_url = self.context.get_queue_url(destination)
        batches = [
            build_batch_arguments(
                queue_url,
                chunk,
                self._delivery_delay,
                region=destination.region,
            )
            for chunk in chunk_list(messages, MAX_BATCH_SIZE)
        ]

        # Chunks are sent in order, so sorting each chunk by its own
        # entry positions keeps the overall caller order.
        successful = []
        failed = []
        for arguments in batches:
            response = self._call('send_message_batch', arguments)
            successful.extend(_in_entry_order(
                arguments,
                [SendResult.from_response(entry) for entry in response.get('Successful', [])]
            ))
            failed.extend(_in_entry_order(
                arguments,
                [BatchResultEntry.from_response(entry) for entry in response.get('Failed', [])]
            ))

        if failed:
            logger.error(
                "SQS rejected batch entries",
                queue_url=queue_url,
                entries=len(messages),
                failed=[entry.to_wire() for entry in failed]
            )
            raise BatchPartialFailure(failed, successful)

        logger.info(
            "Message batch sent to SQS",
            queue_url=queue_url,
            entries=len(messages),
            batches=len(batches)
        )

        return successful

    def set_delivery_delay(self, delivery_delay: Optional[int] = None) -> "SqsProducer":
        """
        Set the default delivery delay in milliseconds; None clears it.

        Raises:
            ValueError: If delivery_delay is negative
        """
        if delivery_delay is not None and delivery_delay < 0:
            raise ValueError("delivery_delay must be a non-negative integer")

        self._delivery_delay = delivery_delay
        return self

    def get_delivery_delay(self) -> Optional[int]:
        return self._delivery_delay

    def set_priority(self, priority: Optional[int] = None) -> "SqsProducer":
        if priority is None:
            return self

        raise PriorityNotSupported.provider_does_not_support_it()

    def get_priority(self) -> Optional[int]:
        return None

    def set_time_to_live(self, time_to_live: Optional[int] = None) -> "SqsProducer":
        if time_to_live is None:
            return self

        raise TimeToLiveNotSupported.provider_does_not_support_it()

    def get_time_to_live(self) -> Optional[int]:
        return None

    def _call(self, operation: str, arguments: WireArguments) -> Dict[str, Any]:
        """Invoke a client operation, mapping transport errors to SendFailed."""
        client = self.context.get_client(arguments.region)
        queue_url = arguments.params['QueueUrl']

        try:
            return getattr(client, operation)(**arguments.params)

        except ClientError as e:
            error = e.response.get('Error', {})
            logger.error(
                "Failed to send message to SQS",
                operation=operation,
                queue_url=queue_url,
                error_code=error.get('Code'),
                error_message=error.get('Message')
            )
            raise SendFailed(
                "Message was not sent",
                details={
                    "queue_url": queue_url,
                    "error_code": error.get('Code'),
                    "error_message": error.get('Message'),
                },
            ) from e

        except BotoCoreError as e:
            logger.error(
                "Unexpected transport error sending message to SQS",
                operation=operation,
                queue_url=queue_url,
                error=str(e)
            )
            raise SendFailed(
                "Message was not sent",
                details={"queue_url": queue_url, "error": str(e)},
            ) from e


def _in_entry_order(arguments: WireArguments, results: List[Any]) -> List[Any]:
    """Sort one chunk's results by the position of their entry in the request."""
    positions = {entry['Id']: index for index, entry in enumerate(arguments.params['Entries'])}
    return sorted(results, key=lambda result: positions.get(result.id, len(positions)))
