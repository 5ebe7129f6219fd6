"""Base model shared by every wire contract."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from notification_library.utils.timestamps import format_wire_timestamp, truncate_to_millis

# UTC datetime stored at millisecond precision, rendered as 2025-11-04T12:00:00.123Z
WireTimestamp = Annotated[
    datetime,
    AfterValidator(truncate_to_millis),
    PlainSerializer(format_wire_timestamp, return_type=str, when_used="json"),
]


class ContractModel(BaseModel):
    """Base for contract models.

    Attributes are snake_case in Python and camelCase on the wire; input is
    accepted under either name. Unknown wire fields are ignored so older
    consumers keep working when producers add fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """JSON-compatible dict with wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_wire_json(self) -> str:
        return self.model_dump_json(by_alias=True)
