"""
Package: producer
Description: SQS producer and its request argument builder.

- arguments: Pure SqsMessage to SQS request translation
- producer: SqsProducer with single and batch sends
"""

from .arguments import WireArguments, build_batch_arguments, build_send_arguments
from .producer import SqsProducer

__all__ = [
    "SqsProducer",
    "WireArguments",
    "build_send_arguments",
    "build_batch_arguments",
]
