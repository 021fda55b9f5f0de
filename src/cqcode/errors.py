"""Exception classes for cqcode.

Parsing, serialization and normalization never raise: malformed tags degrade
to literal text. These exceptions are only raised by the host collaborators
(charset adaptation and message delivery).
"""

from __future__ import annotations


class CQCodeError(Exception):
    """Base exception for all cqcode errors."""

    pass


class CharsetError(CQCodeError):
    """Text could not be converted to or from a host charset.

    Raised for unknown charsets, text the charset cannot represent, and bytes
    that are not valid in the charset.
    """

    def __init__(self, charset: str, message: str) -> None:
        """Initialize charset error.

        Args:
            charset: Name of the charset involved in the conversion
            message: Description of the failure
        """
        self.charset = charset
        super().__init__(f"Charset '{charset}': {message}")


class DeliveryError(CQCodeError):
    """The delivery collaborator refused a message.

    Carries the negative status code returned by the sender.
    """

    def __init__(self, code: int, message: str | None = None) -> None:
        """Initialize delivery error.

        Args:
            code: Status code returned by the sender (negative)
            message: Optional description of the failure
        """
        self.code = code
        detail = f": {message}" if message else ""
        super().__init__(f"Delivery failed with code {code}{detail}")
