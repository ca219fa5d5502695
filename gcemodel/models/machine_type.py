"""
Compute Engine machine type.

A machine type determines the virtualized hardware of an instance: the number
of virtual CPUs, the amount of memory and the disk limits. Instances are built
with ``MachineType.builder()`` and are immutable afterwards.

See https://cloud.google.com/compute/docs/machine-types
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Sequence, Tuple

from gcemodel.errors import ComputeModelError, InvalidFieldError, MissingFieldError
from gcemodel.models.deprecation import DeprecationStatus
from gcemodel.models.identity import MachineTypeId
from gcemodel.models.wire import (
    decode_id,
    encode_id,
    format_timestamp,
    parse_timestamp,
    put,
)


@dataclass(frozen=True, eq=False)
class MachineType:
    machine_type_id: MachineTypeId
    id: Optional[str] = None
    creation_timestamp: Optional[int] = None     # ms since epoch
    description: Optional[str] = None
    cpus: Optional[int] = None
    memory_mb: Optional[int] = None
    scratch_disks_size_gb: Optional[Tuple[int, ...]] = None
    maximum_persistent_disks: Optional[int] = None
    maximum_persistent_disks_size_gb: Optional[int] = None
    deprecation_status: Optional[DeprecationStatus[MachineTypeId]] = None

    @staticmethod
    def builder() -> "Builder":
        return Builder()

    def to_builder(self) -> "Builder":
        b = Builder()
        b._values = {f.name: getattr(self, f.name) for f in fields(self)}
        return b

    @property
    def name(self) -> str:
        return self.machine_type_id.machine_type

    @property
    def is_usable(self) -> bool:
        """False when the machine type is OBSOLETE or DELETED."""
        return self.deprecation_status is None or self.deprecation_status.is_usable

    # ------------------------------------------------------------------ wire
    def to_wire(self) -> Dict[str, Any]:
        """
        Map to the Compute Engine wire form.

        Unset fields are omitted rather than emitted as defaults. Raises
        MalformedIdError if ``id`` is not a decimal integer.
        """
        mid = self.machine_type_id
        payload: Dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = encode_id(self.id)
        if self.creation_timestamp is not None:
            payload["creationTimestamp"] = format_timestamp(self.creation_timestamp)
        payload["name"] = mid.machine_type
        put(payload, "description", self.description)
        payload["selfLink"] = mid.self_link
        put(payload, "guestCpus", self.cpus)
        put(payload, "memoryMb", self.memory_mb)
        if self.scratch_disks_size_gb is not None:
            payload["scratchDisks"] = [{"diskGb": size} for size in self.scratch_disks_size_gb]
        put(payload, "maximumPersistentDisks", self.maximum_persistent_disks)
        put(payload, "maximumPersistentDisksSizeGb", self.maximum_persistent_disks_size_gb)
        payload["zone"] = mid.zone
        if self.deprecation_status is not None:
            payload["deprecated"] = self.deprecation_status.to_wire()
        return payload

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> "MachineType":
        """
        Build a MachineType from its wire form.

        The identity always comes from ``selfLink``. Absent keys stay unset.
        """
        if not isinstance(payload, dict):
            raise InvalidFieldError("<root>", "MachineType wire form", "an object")
        self_link = payload.get("selfLink")
        if self_link is None:
            raise MissingFieldError("selfLink", "MachineType wire form")

        b = cls.builder().machine_type_id(MachineTypeId.from_url(self_link))
        if payload.get("id") is not None:
            b.id(decode_id(payload["id"]))
        if payload.get("creationTimestamp") is not None:
            b.creation_timestamp(parse_timestamp(payload["creationTimestamp"]))
        b.description(payload.get("description"))
        b.cpus(payload.get("guestCpus"))
        b.memory_mb(payload.get("memoryMb"))
        if payload.get("scratchDisks") is not None:
            b.scratch_disks_size_gb(_scratch_sizes(payload["scratchDisks"]))
        b.maximum_persistent_disks(payload.get("maximumPersistentDisks"))
        b.maximum_persistent_disks_size_gb(
            _as_int(payload.get("maximumPersistentDisksSizeGb"))
        )
        if payload.get("deprecated") is not None:
            b.deprecation_status(
                DeprecationStatus.from_wire(payload["deprecated"], MachineTypeId.from_url)
            )
        return b.build()

    # ------------------------------------------------------------------ identity
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MachineType):
            return NotImplemented
        return self.to_wire() == other.to_wire()

    def __hash__(self) -> int:
        return hash(self.machine_type_id)


def _scratch_sizes(disks: Any) -> List[int]:
    if not isinstance(disks, list):
        raise InvalidFieldError("scratchDisks", "MachineType", "a list")
    sizes = []
    for i, disk in enumerate(disks):
        if not isinstance(disk, dict):
            raise InvalidFieldError(f"scratchDisks[{i}]", "MachineType", "an object")
        sizes.append(disk.get("diskGb"))
    return sizes


def _as_int(value: Any) -> Optional[int]:
    # int64 fields arrive as decimal strings in the JSON API
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            raise ComputeModelError(f"'{value}' is not an integer") from None
    return value


class Builder:
    """
    Mutable accumulator for MachineType. Every setter returns the builder.

    Not safe to share between threads.
    """

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "Builder":
        self._values[name] = value
        return self

    def machine_type_id(self, value: MachineTypeId) -> "Builder":
        return self._set("machine_type_id", value)

    def id(self, value: Optional[str]) -> "Builder":
        return self._set("id", value)

    def creation_timestamp(self, value: Optional[int]) -> "Builder":
        return self._set("creation_timestamp", value)

    def description(self, value: Optional[str]) -> "Builder":
        return self._set("description", value)

    def cpus(self, value: Optional[int]) -> "Builder":
        return self._set("cpus", value)

    def memory_mb(self, value: Optional[int]) -> "Builder":
        return self._set("memory_mb", value)

    def scratch_disks_size_gb(self, value: Optional[Sequence[int]]) -> "Builder":
        return self._set("scratch_disks_size_gb", None if value is None else tuple(value))

    def maximum_persistent_disks(self, value: Optional[int]) -> "Builder":
        return self._set("maximum_persistent_disks", value)

    def maximum_persistent_disks_size_gb(self, value: Optional[int]) -> "Builder":
        return self._set("maximum_persistent_disks_size_gb", value)

    def deprecation_status(
        self, value: Optional[DeprecationStatus[MachineTypeId]]
    ) -> "Builder":
        return self._set("deprecation_status", value)

    def build(self) -> MachineType:
        if self._values.get("machine_type_id") is None:
            raise MissingFieldError("machine_type_id", "MachineType")
        return MachineType(**self._values)


def to_wire(machine_type: MachineType) -> Dict[str, Any]:
    return machine_type.to_wire()


def from_wire(payload: Dict[str, Any]) -> MachineType:
    return MachineType.from_wire(payload)
