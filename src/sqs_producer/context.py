"""
Module: context.py
Description: SQS context binding boto3 clients to producers.

The context owns the boto3 SQS client (created lazily when given a
factory), one extra client per region override, and the cache of
resolved queue URLs. It is also the factory for producers, queue
destinations and messages.

Key Components:
- SqsContext: Client access, queue URL resolution, object factories
- declare_queue() / delete_queue() / purge_queue(): Queue administration

Dependencies: boto3, botocore, typing
Author: SQS Producer Team
"""

from typing import Any, Callable, Dict, Optional, Tuple

import boto3
from botocore.exceptions import ClientError

from sqs_producer.exceptions import InvalidDestination, ResolutionError
from sqs_producer.models.destination import SqsDestination
from sqs_producer.models.message import SqsMessage
from sqs_producer.producer.producer import SqsProducer
from sqs_producer.utils.logger import get_logger

logger = get_logger(__name__)


def _default_region_client(region: str) -> Any:
    return boto3.client('sqs', region_name=region)


class SqsContext:
    """
    Context for SQS producers.

    Attributes:
        delivery_delay: Delivery delay (ms) given to new producers

    Example:
        >>> context = SqsContext(boto3.client('sqs', region_name='us-east-1'))
        >>> queue = context.create_queue('orders')
        >>> context.create_producer().send(queue, context.create_message('hello'))
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        client_loader: Optional[Callable[[], Any]] = None,
        client_factory: Optional[Callable[[str], Any]] = None,
        delivery_delay: Optional[int] = None
    ):
        """
        Initialize SQS context.

        Args:
            client: boto3 SQS client
            client_loader: Zero-argument callable creating the client on first use
            client_factory: Callable creating a client for a region override
            delivery_delay: Default delivery delay in milliseconds for producers

        Raises:
            ValueError: If neither client nor client_loader is given
        """
        if client is None and client_loader is None:
            raise ValueError("client or client_loader must be provided")

        self._client = client
        self._client_loader = client_loader
        self._client_factory = client_factory or _default_region_client
        self._region_clients: Dict[str, Any] = {}
        self._queue_urls: Dict[Tuple[Optional[str], str], str] = {}
        self.delivery_delay = delivery_delay

    def get_client(self, region: Optional[str] = None) -> Any:
        """
        Return the SQS client for a region override, or the default client.

        Region clients are created on first use and reused afterwards.
        """
        if region is None:
            if self._client is None:
                self._client = self._client_loader()
                logger.debug("SQS client created lazily")
            return self._client

        if region not in self._region_clients:
            self._region_clients[region] = self._client_factory(region)
            logger.debug("SQS region client created", region=region)

        return self._region_clients[region]

    def get_queue_url(self, destination: SqsDestination) -> str:
        """
        Resolve a destination to its queue URL.

        The lookup is done once per (region, name) and then cached.

        Raises:
            InvalidDestination: If destination is not an SqsDestination
            ResolutionError: If the name is empty or SQS cannot resolve it
        """
        InvalidDestination.assert_destination_instance_of(destination, SqsDestination)

        if not destination.name:
            raise ResolutionError("The destination queue name must be a non-empty string.")

        key = (destination.region, destination.name)
        if key in self._queue_urls:
            return self._queue_urls[key]

        try:
            response = self.get_client(destination.region).get_queue_url(
                QueueName=destination.name
            )
        except ClientError as e:
            error = e.response.get('Error', {})
            logger.error(
                "Failed to resolve SQS queue URL",
                queue_name=destination.name,
                region=destination.region,
                error_code=error.get('Code'),
                error_message=error.get('Message')
            )
            raise ResolutionError(
                f"The queue \"{destination.name}\" could not be resolved",
                details={"queue_name": destination.name, "error_code": error.get('Code')},
            ) from e

        queue_url = response['QueueUrl']
        self._queue_urls[key] = queue_url

        logger.info(
            "SQS queue URL resolved",
            queue_name=destination.name,
            queue_url=queue_url
        )

        return queue_url

    def create_producer(self) -> SqsProducer:
        return SqsProducer(self, delivery_delay=self.delivery_delay)

    def create_queue(self, name: str, region: Optional[str] = None) -> SqsDestination:
        return SqsDestination(name=name, region=region)

    def create_message(
        self,
        body: str = "",
        properties: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, Any]] = None
    ) -> SqsMessage:
        return SqsMessage(body=body, properties=properties or {}, headers=headers or {})

    def declare_queue(
        self,
        destination: SqsDestination,
        attributes: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Create the queue if needed and cache its URL.

        FIFO attributes are added for names ending in '.fifo'.

        Returns:
            Queue URL
        """
        InvalidDestination.assert_destination_instance_of(destination, SqsDestination)

        attributes = dict(attributes or {})
        if destination.is_fifo:
            attributes.setdefault('FifoQueue', 'true')

        response = self.get_client(destination.region).create_queue(
            QueueName=destination.name,
            Attributes=attributes
        )

        queue_url = response['QueueUrl']
        self._queue_urls[(destination.region, destination.name)] = queue_url

        logger.info(
            "SQS queue declared",
            queue_name=destination.name,
            queue_url=queue_url
        )

        return queue_url

    def delete_queue(self, destination: SqsDestination) -> None:
        queue_url = self.get_queue_url(destination)
        self.get_client(destination.region).delete_queue(QueueUrl=queue_url)
        del self._queue_urls[(destination.region, destination.name)]

        logger.info("SQS queue deleted", queue_url=queue_url)

    def purge_queue(self, destination: SqsDestination) -> None:
        queue_url = self.get_queue_url(destination)
        self.get_client(destination.region).purge_queue(QueueUrl=queue_url)

        logger.info("SQS queue purged", queue_url=queue_url)
