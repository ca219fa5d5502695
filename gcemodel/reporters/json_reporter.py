"""
JSON machine type catalog: the wire form of every machine type plus metadata.
"""
import json
from datetime import datetime, timezone
from typing import List

from gcemodel import __version__
from gcemodel.models.machine_type import MachineType


def build_report(machine_types: List[MachineType], source_path: str) -> str:
    report = {
        "meta": {
            "generated": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "source": source_path,
            "tool": "gcemodel",
            "version": __version__,
        },
        "kind": "compute#machineTypeList",
        "items": [mt.to_wire() for mt in machine_types],
    }
    return json.dumps(report, indent=2)
