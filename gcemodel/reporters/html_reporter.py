"""
HTML machine type catalog.
"""
from datetime import datetime, timezone
from typing import List

from jinja2 import Environment

from gcemodel import __version__
from gcemodel.models.machine_type import MachineType
from gcemodel.reporters import markdown

_HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Machine Type Catalog - gcemodel</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; color: #333; max-width: 1200px; margin: 0 auto; padding: 2rem; background: #f9f9f9; }
        .meta { color: #666; font-size: 0.9rem; margin-bottom: 2rem; }
        table { width: 100%; border-collapse: collapse; background: white; margin-bottom: 2rem; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        th, td { padding: 0.6rem 1rem; text-align: left; border-bottom: 1px solid #eee; }
        th { background: #f5f5f5; }
        td.num { text-align: right; }
        .unusable { color: #999; text-decoration: line-through; }
    </style>
</head>
<body>
    <h1>Machine Type Catalog</h1>
    <div class="meta">Generated: {{ generated }} | Source: {{ source }} | gcemodel v{{ version }} | {{ total }} machine types</div>

    {% for zone, members in zones.items() %}
    <h2>{{ zone }}</h2>
    <table>
        <thead>
            <tr><th>Name</th><th>vCPUs</th><th>Memory (MB)</th><th>Scratch disks (GB)</th><th>Max PDs</th><th>Max PD size (GB)</th><th>Status</th></tr>
        </thead>
        <tbody>
            {% for mt in members %}
            <tr{% if not mt.is_usable %} class="unusable"{% endif %}>
                <td><a href="{{ mt.machine_type_id.self_link }}">{{ mt.name }}</a></td>
                <td class="num">{{ mt.cpus if mt.cpus is not none else "" }}</td>
                <td class="num">{{ mt.memory_mb if mt.memory_mb is not none else "" }}</td>
                <td>{{ scratch(mt) }}</td>
                <td class="num">{{ mt.maximum_persistent_disks if mt.maximum_persistent_disks is not none else "" }}</td>
                <td class="num">{{ mt.maximum_persistent_disks_size_gb if mt.maximum_persistent_disks_size_gb is not none else "" }}</td>
                <td>{{ status(mt) }}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>
    {% endfor %}
</body>
</html>
"""


def build_report(machine_types: List[MachineType], source_path: str) -> str:
    env = Environment(autoescape=True)
    template = env.from_string(_HTML_TEMPLATE)

    return template.render(
        generated=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        source=source_path,
        version=__version__,
        total=len(machine_types),
        zones=markdown.group_by_zone(machine_types),
        scratch=markdown.scratch_label,
        status=lambda mt: markdown.status_label(mt, code=False),
    )
