"""
Resource identities: structured keys derived from Compute Engine resource paths.
"""
import re
from dataclasses import dataclass
from typing import Optional

from gcemodel.errors import MalformedUrlError

BASE_URL = "https://www.googleapis.com/compute/v1/"

# Self-links may be absolute (https://.../compute/v1/projects/...) or relative
# to the API root (projects/...).
_ZONE_RE = re.compile(r"^(?:.*/)?projects/([^/]+)/zones/([^/]+)$")
_MACHINE_TYPE_RE = re.compile(
    r"^(?:.*/)?projects/([^/]+)/zones/([^/]+)/machineTypes/([^/]+)$"
)


def _match(pattern: "re.Pattern", url, expected: str) -> "re.Match":
    if not isinstance(url, str):
        raise MalformedUrlError(url, expected)
    m = pattern.match(url)
    if m is None:
        raise MalformedUrlError(url, expected)
    return m


@dataclass(frozen=True)
class ZoneId:
    project: str
    zone: str

    @property
    def self_link(self) -> str:
        return f"{BASE_URL}projects/{self.project}/zones/{self.zone}"

    @classmethod
    def of(cls, project: str, zone: str) -> "ZoneId":
        return cls(project=project, zone=zone)

    @classmethod
    def matches_url(cls, url: str) -> bool:
        return isinstance(url, str) and _ZONE_RE.match(url) is not None

    @classmethod
    def from_url(cls, url: str) -> "ZoneId":
        m = _match(_ZONE_RE, url, "zone")
        return cls(project=m.group(1), zone=m.group(2))

    def __str__(self) -> str:
        return f"{self.project}/{self.zone}"


@dataclass(frozen=True)
class MachineTypeId:
    """Identity of a machine type: the zone that offers it plus its name."""

    project: str
    zone: str
    machine_type: str

    @property
    def zone_id(self) -> ZoneId:
        return ZoneId(project=self.project, zone=self.zone)

    @property
    def self_link(self) -> str:
        return f"{self.zone_id.self_link}/machineTypes/{self.machine_type}"

    @classmethod
    def of(
        cls,
        project: str,
        zone: str,
        machine_type: str,
    ) -> "MachineTypeId":
        return cls(project=project, zone=zone, machine_type=machine_type)

    @classmethod
    def in_zone(cls, zone_id: ZoneId, machine_type: str) -> "MachineTypeId":
        return cls(project=zone_id.project, zone=zone_id.zone, machine_type=machine_type)

    @classmethod
    def matches_url(cls, url: str) -> bool:
        return isinstance(url, str) and _MACHINE_TYPE_RE.match(url) is not None

    @classmethod
    def from_url(cls, url: str) -> "MachineTypeId":
        """
        Parse a machine type self-link such as
        ``https://www.googleapis.com/compute/v1/projects/p/zones/z/machineTypes/n1-standard-1``.

        Raises MalformedUrlError when the path does not have that shape.
        """
        m = _match(_MACHINE_TYPE_RE, url, "machine type")
        return cls(project=m.group(1), zone=m.group(2), machine_type=m.group(3))

    def __str__(self) -> str:
        return f"{self.project}/{self.zone}/{self.machine_type}"


def zone_name(zone_url: Optional[str]) -> Optional[str]:
    """Return the bare zone name for a zone URL or name, e.g. 'us-central1-a'."""
    if not zone_url:
        return None
    return zone_url.rstrip("/").rsplit("/", 1)[-1]
