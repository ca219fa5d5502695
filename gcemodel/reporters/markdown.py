"""
Markdown machine type catalog, grouped by zone.
"""
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional

from gcemodel.models.machine_type import MachineType

_STATUS_BADGE = {
    "ACTIVE": "active",
    "DEPRECATED": "⚠️ deprecated",
    "OBSOLETE": "⛔ obsolete",
    "DELETED": "⛔ deleted",
}


def _cell(value: Optional[object]) -> str:
    return "—" if value is None else str(value)


def status_label(mt: MachineType, code: bool = True) -> str:
    if mt.deprecation_status is None:
        return _STATUS_BADGE["ACTIVE"]
    label = _STATUS_BADGE[mt.deprecation_status.status.value]
    replacement = mt.deprecation_status.replacement
    if replacement is not None:
        name = f"`{replacement.machine_type}`" if code else replacement.machine_type
        label += f" → {name}"
    return label


def scratch_label(mt: MachineType) -> str:
    if not mt.scratch_disks_size_gb:
        return "—"
    return ", ".join(str(s) for s in mt.scratch_disks_size_gb)


def group_by_zone(machine_types: List[MachineType]) -> Dict[str, List[MachineType]]:
    zones: Dict[str, List[MachineType]] = defaultdict(list)
    for mt in machine_types:
        zones[str(mt.machine_type_id.zone_id)].append(mt)
    return {z: sorted(zones[z], key=lambda m: m.name) for z in sorted(zones)}


def build_report(machine_types: List[MachineType], source_path: str) -> str:
    lines = [
        "# Machine Type Catalog",
        "",
        f"- **Source:** `{source_path}`",
        f"- **Generated:** {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}",
        f"- **Machine types:** {len(machine_types)}",
        "",
    ]

    for zone, members in group_by_zone(machine_types).items():
        lines += [
            f"## {zone}",
            "",
            "| Name | vCPUs | Memory (MB) | Scratch disks (GB) | Max PDs | Max PD size (GB) | Status |",
            "|------|------:|------------:|--------------------|--------:|-----------------:|--------|",
        ]
        for mt in members:
            lines.append(
                f"| `{mt.name}` | {_cell(mt.cpus)} | {_cell(mt.memory_mb)} | {scratch_label(mt)} "
                f"| {_cell(mt.maximum_persistent_disks)} | {_cell(mt.maximum_persistent_disks_size_gb)} "
                f"| {status_label(mt)} |"
            )
        lines.append("")

    return "\n".join(lines)
