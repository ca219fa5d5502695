"""
Load machine types from wire-form documents on disk.

Accepted document shapes (JSON or YAML):
  - a single machine type:            {"kind": "compute#machineType", ...}
  - a machineTypes.list response:     {"items": [ ... ]}
  - a machineTypes.aggregatedList:    {"items": {"zones/z": {"machineTypes": [ ... ]}}}
  - a bare list of machine types:     [ ... ]
"""
import json
import os
from typing import Any, Dict, Iterator, List

import yaml
from rich.console import Console

from gcemodel.errors import ComputeModelError
from gcemodel.models.machine_type import MachineType

console = Console(stderr=True)

_EXTENSIONS = (".json", ".yaml", ".yml")


def detect_shape(doc: Any) -> str:
    """
    Return 'machineType', 'list', 'aggregatedList', 'array', or 'unknown'.
    """
    if isinstance(doc, list):
        return "array"
    if not isinstance(doc, dict):
        return "unknown"

    kind = str(doc.get("kind", ""))
    items = doc.get("items")
    if kind == "compute#machineTypeAggregatedList" or isinstance(items, dict):
        return "aggregatedList"
    if kind == "compute#machineTypeList" or isinstance(items, list):
        return "list"
    if kind == "compute#machineType" or "selfLink" in doc:
        return "machineType"
    return "unknown"


def _payloads(doc: Any) -> Iterator[Dict[str, Any]]:
    shape = detect_shape(doc)
    if shape == "machineType":
        yield doc
    elif shape == "array":
        yield from _objects(doc)
    elif shape == "list":
        yield from _objects(doc.get("items"))
    elif shape == "aggregatedList":
        for scope in (doc.get("items") or {}).values():
            # scopes without machine types carry only a "warning" entry
            if isinstance(scope, dict):
                yield from _objects(scope.get("machineTypes"))


def _objects(items: Any) -> Iterator[Dict[str, Any]]:
    if isinstance(items, list):
        for item in items:
            if isinstance(item, dict):
                yield item


def _read(filepath: str) -> List[Any]:
    _, ext = os.path.splitext(filepath.lower())
    with open(filepath, encoding="utf-8") as fh:
        if ext == ".json":
            return [json.load(fh)]
        return [d for d in yaml.safe_load_all(fh) if d is not None]


def load_documents(
    docs: List[Any], skip_invalid: bool = False, source: str = ""
) -> List[MachineType]:
    machine_types: List[MachineType] = []
    for doc in docs:
        if detect_shape(doc) == "unknown":
            console.print(f"[dim]Debug:[/dim] skipping unrecognised document in {source or '<input>'}")
            continue
        for payload in _payloads(doc):
            try:
                machine_types.append(MachineType.from_wire(payload))
            except ComputeModelError as exc:
                if not skip_invalid:
                    raise
                console.print(f"[yellow]Warning:[/yellow] skipping machine type in {source}: {exc}")
    return machine_types


def parse_file(filepath: str, skip_invalid: bool = False) -> List[MachineType]:
    """Parse one wire-form file. Unreadable files yield an empty list."""
    try:
        docs = _read(filepath)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[yellow]Warning:[/yellow] could not read {filepath}: {exc}")
        return []
    return load_documents(docs, skip_invalid=skip_invalid, source=filepath)


def parse_directory(path: str, skip_invalid: bool = False) -> List[MachineType]:
    if os.path.isfile(path):
        return parse_file(path, skip_invalid=skip_invalid)

    machine_types: List[MachineType] = []
    for root, _, files in os.walk(path):
        for fname in sorted(files):
            if fname.lower().endswith(_EXTENSIONS):
                machine_types.extend(parse_file(os.path.join(root, fname), skip_invalid))
    return machine_types
