"""Base class for contract enumerations serialized by code."""

import re
from enum import Enum
from typing import List

from notification_library.exceptions import UnknownCodeError


def _describe(enum_cls: type) -> str:
    """Turn a class name like ChannelType into 'channel type' for error messages."""
    return re.sub(r"(?<!^)(?=[A-Z])", " ", enum_cls.__name__).lower()


class CodedEnum(str, Enum):
    """A closed vocabulary whose members serialize as their wire code.

    Members are `str` instances equal to their code, so they can be used
    directly as JSON values and dictionary keys. Lookup by code is strict:
    unknown codes raise UnknownCodeError instead of falling back to a default.
    """

    def __str__(self) -> str:
        return self.value

    @property
    def code(self) -> str:
        """Stable wire identifier."""
        return self.value

    @classmethod
    def from_code(cls, code: str):
        """Resolve a member from its wire code.

        Raises:
            UnknownCodeError: If no member carries this code
        """
        for member in cls:
            if member.value == code:
                return member
        raise UnknownCodeError(_describe(cls), code)

    @classmethod
    def codes(cls) -> List[str]:
        """All wire codes in declaration order."""
        return [member.value for member in cls]
