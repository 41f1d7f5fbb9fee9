# -*- encoding: utf-8 -*-
"""
chronokv RecordView - Read-only projection of a key at one timestamp.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional


def format_entry(field_name: str, value: str) -> str:
    """Format a resolved field as "field(value)". Values are not escaped."""
    return f"{field_name}({value})"


@dataclass(frozen=True)
class RecordView:
    """
    Live fields of a key as of a timestamp.

    Attributes:
        key: The key that was scanned
        timestamp: Query timestamp
        fields: Field name -> resolved value, in ascending field order
        prefix: Field-name prefix the scan was restricted to, if any
    """
    key: str
    timestamp: int
    fields: dict[str, str] = field(default_factory=dict)
    prefix: Optional[str] = None

    def entries(self) -> list[str]:
        """Formatted "field(value)" strings in field order."""
        return [format_entry(name, value) for name, value in self.fields.items()]

    def get(self, field_name: str) -> Optional[str]:
        return self.fields.get(field_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __bool__(self) -> bool:
        return len(self.fields) > 0

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.fields

    def to_dict(self) -> dict:
        """Serialize to dict for command results."""
        result = {
            "key": self.key,
            "timestamp": self.timestamp,
            "fields": dict(self.fields),
        }
        if self.prefix is not None:
            result["prefix"] = self.prefix
        return result
