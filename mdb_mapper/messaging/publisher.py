"""
Message publishing.

Publishes messages to a topic, optionally through a message transformer that
turns the message into the bytes actually sent.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

from bson import json_util

from ..constants import CORRELATION_ID_ATTRIBUTE
from ..exceptions import InvalidArgumentError, MissingRequiredArgumentError
from ..observability import get_correlation_id, get_logger

logger = get_logger(__name__)

Transformer = Callable[[Any], bytes]


def default_transformer(message: Any) -> bytes:
    """
    Return the message JSON-encoded as UTF-8 bytes.

    BSON values (DatetimeMS, ObjectId, ...) are encoded as MongoDB
    extended JSON.
    """
    return json.dumps(message, default=json_util.default).encode("utf-8")


class Publisher:
    """
    Publishes messages to a topic.

    The topic is any object with an async ``publish(data, attributes)``
    method, where ``data`` is bytes and ``attributes`` maps strings to
    strings (or is None).

    Example:
        publisher = Publisher(topic)
        await publisher.publish({"event": "created", "id": "42"}, {"source": "people"})
    """

    DEFAULT_TRANSFORMER: Transformer = staticmethod(default_transformer)

    def __init__(self, topic: Any, transformer: Transformer | None = None):
        """
        Initialize the publisher.

        Args:
            topic: Topic to publish to
            transformer: Message transformer returning bytes; defaults to
                ``Publisher.DEFAULT_TRANSFORMER``
        """
        self.topic = topic
        self.transformer = transformer or self.DEFAULT_TRANSFORMER

    async def publish(
        self,
        message: Any,
        attributes: Mapping[str, str] | None = None,
        transformer: Transformer | None = None,
    ) -> Any:
        """
        Publish a message.

        Args:
            message: Message to publish
            attributes: Optional attributes with string values; the current
                correlation ID is added unless the caller provides one
            transformer: Optional transformer for this message only

        Returns:
            Whatever the topic's ``publish`` returns (e.g. a message id)

        Raises:
            MissingRequiredArgumentError: If ``message`` is None
            InvalidArgumentError: If an attribute value is not a string
        """
        if message is None:
            raise MissingRequiredArgumentError("message")
        attributes = self._test_attributes(attributes)
        correlation_id = get_correlation_id()
        if correlation_id:
            attributes.setdefault(CORRELATION_ID_ATTRIBUTE, correlation_id)
        transformer = (transformer and self._test_set_transformer(transformer)) or self._transformer

        data = transformer(message)
        logger.debug(f"Publishing {type(message).__name__} message")
        return await self._topic.publish(data, attributes or None)

    def _test_attributes(self, attributes: Mapping[str, str] | None) -> dict[str, str]:
        if not attributes:
            return {}
        for key, value in attributes.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise InvalidArgumentError(
                    "Message attributes must map strings to strings", argument=key
                )
        return dict(attributes)

    @property
    def topic(self) -> Any:
        return self._topic

    def _test_set_topic(self, topic: Any) -> Any:
        if topic is None:
            raise MissingRequiredArgumentError("topic")
        if not callable(getattr(topic, "publish", None)):
            raise InvalidArgumentError("Topic must provide a publish method", argument=topic)
        return topic

    @topic.setter
    def topic(self, topic: Any) -> None:
        self._topic = self._test_set_topic(topic)

    def with_topic(self, topic: Any) -> "Publisher":
        self.topic = topic
        return self

    @property
    def transformer(self) -> Transformer:
        return self._transformer

    def _test_set_transformer(self, transformer: Any) -> Transformer:
        if transformer is None:
            raise MissingRequiredArgumentError("transformer")
        if not callable(transformer):
            raise InvalidArgumentError("Transformer must be callable", argument=transformer)
        return transformer

    @transformer.setter
    def transformer(self, transformer: Transformer) -> None:
        self._transformer = self._test_set_transformer(transformer)

    def with_transformer(self, transformer: Transformer) -> "Publisher":
        self.transformer = transformer
        return self
