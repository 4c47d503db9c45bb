"""
Shared base for records persisted in the flat-file store.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class RecordModel(BaseModel):
    """
    Base model for stored records.

    Field names are snake_case in Python and camelCase on disk and on the
    wire. Attributes the model does not declare are kept as-is so a
    read-modify-write never drops them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_record(self) -> Dict[str, Any]:
        """Serialize for the JSON file."""
        return self.model_dump(by_alias=True)
