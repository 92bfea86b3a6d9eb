"""
Workspace manifest generation.

Lists the copied entries that are packages (they contain a package
descriptor) as workspace tasks, followed by the configured tools.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .manifest import Manifest


def collect_tasks(out_root: Path, entries: Iterable[str], descriptor: str) -> List[str]:
    """Return the declared entries that hold a package descriptor."""
    return [entry for entry in entries if (Path(out_root) / entry / descriptor).is_file()]


def _quote(member: str) -> str:
    escaped = member.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_workspace(tasks: Iterable[str], tools: Iterable[str]) -> str:
    lines = ["[workspace]", "members = [", "    # Tasks"]
    lines += [f"    {_quote(task)}," for task in tasks]
    lines += ["", "    # Tools"]
    lines += [f"    {_quote(tool)}," for tool in tools]
    lines += ["]", ""]
    return "\n".join(lines)


def write_workspace(out_root: Path, manifest: Manifest, extra_tools: Iterable[str] = ()) -> Path:
    """
    Write the workspace descriptor at the root of the output tree.

    Returns:
        Path of the written file
    """

    out_root = Path(out_root)
    descriptor = manifest.syntax.package_descriptor

    tasks = collect_tasks(out_root, manifest.entries, descriptor)
    tools = list(manifest.workspace_tools) + [Path(tool).as_posix() for tool in extra_tools]

    path = out_root / descriptor
    path.write_text(render_workspace(tasks, tools), encoding="utf-8")
    return path
