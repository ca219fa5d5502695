"""
Deprecation status attached to Compute Engine resources.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from gcemodel.errors import InvalidFieldError, MissingFieldError, UnknownStatusError
from gcemodel.models.wire import format_timestamp, parse_timestamp, put

T = TypeVar("T")


class Status(str, Enum):
    ACTIVE     = "ACTIVE"
    DEPRECATED = "DEPRECATED"
    OBSOLETE   = "OBSOLETE"
    DELETED    = "DELETED"


@dataclass(frozen=True)
class DeprecationStatus(Generic[T]):
    """
    Lifecycle marker for a resource.

    ``replacement`` is the identity of the suggested replacement resource; the
    three timestamps (milliseconds since epoch) record when the resource was or
    will be moved to the corresponding state.
    """

    status: Status
    replacement: Optional[T] = None
    deprecated: Optional[int] = None
    obsolete: Optional[int] = None
    deleted: Optional[int] = None

    @property
    def is_usable(self) -> bool:
        # OBSOLETE and DELETED resources must not be used for new instances.
        return self.status in (Status.ACTIVE, Status.DEPRECATED)

    def to_wire(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"state": self.status.value}
        if self.replacement is not None:
            payload["replacement"] = self.replacement.self_link
        if self.deprecated is not None:
            payload["deprecated"] = format_timestamp(self.deprecated)
        if self.obsolete is not None:
            payload["obsolete"] = format_timestamp(self.obsolete)
        if self.deleted is not None:
            payload["deleted"] = format_timestamp(self.deleted)
        return payload

    @classmethod
    def from_wire(
        cls,
        payload: Dict[str, Any],
        from_url: Callable[[str], T],
    ) -> "DeprecationStatus[T]":
        if not isinstance(payload, dict):
            raise InvalidFieldError("deprecated", "MachineType", "an object")
        state = payload.get("state")
        if state is None:
            raise MissingFieldError("state", "DeprecationStatus")
        try:
            status = Status(state)
        except ValueError:
            raise UnknownStatusError(state) from None

        replacement = payload.get("replacement")
        fields: Dict[str, Any] = {}
        put(fields, "replacement", from_url(replacement) if replacement else None)
        for key in ("deprecated", "obsolete", "deleted"):
            if payload.get(key):
                fields[key] = parse_timestamp(payload[key])
        return cls(status=status, **fields)
