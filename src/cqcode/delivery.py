"""Message delivery boundary.

cqcode does not talk to any network. Delivery is delegated to a
``MessageSender`` supplied by the host application; this module only
validates the destination, serializes the message and interprets the status
code the sender returns.

Example:
    class HttpSender:
        def send_msg(self, target: Target, text: str) -> int:
            return api.post("send_msg", **target.as_params(), message=text)

    message_id = send(parse("hi"), Target(group_id=123456), HttpSender())

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from cqcode.errors import DeliveryError
from cqcode.serialization import dumps
from cqcode.utils.logger import get_logger

if TYPE_CHECKING:
    from cqcode.message import Message

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Target:
    """Destination of a message: one user, group or discussion.

    Exactly one of the ids must be set.
    """

    user_id: int | None = None
    group_id: int | None = None
    discuss_id: int | None = None

    def __post_init__(self) -> None:
        set_ids = [v for v in (self.user_id, self.group_id, self.discuss_id) if v is not None]
        if len(set_ids) != 1:
            msg = "Target needs exactly one of user_id, group_id or discuss_id"
            raise ValueError(msg)

    def as_params(self) -> dict[str, int]:
        """Return the id that is set as a single-entry dict."""
        if self.group_id is not None:
            return {"group_id": self.group_id}
        if self.discuss_id is not None:
            return {"discuss_id": self.discuss_id}
        return {"user_id": self.user_id}  # type: ignore[dict-item]


class MessageSender(Protocol):
    """Protocol for delivery collaborators.

    ``send_msg`` returns the id assigned to the delivered message, or a
    negative status code on failure.
    """

    def send_msg(self, target: Target, text: str) -> int:
        """Deliver serialized CQ code text to ``target``."""
        ...


def send(message: Message, target: Target, sender: MessageSender) -> int:
    """Serialize ``message`` and hand it to ``sender``.

    Returns:
        Message id assigned by the sender

    Raises:
        DeliveryError: If the sender returns a negative status code
    """
    result = sender.send_msg(target, dumps(message))
    if result < 0:
        logger.warning("Delivery to %s failed with code %d", target, result)
        raise DeliveryError(result)
    return result


__all__ = [
    "MessageSender",
    "Target",
    "send",
]
