from __future__ import annotations

import json
from typing import Iterable, List

from cyclomatic.analysis.complexity_tree import ComplexityNode
from cyclomatic.analysis.graph import Graph
from cyclomatic.core.engine import FileReport


PATH_SEPARATOR = " > "


def _leaf_lines(node: ComplexityNode, path: str, lines: List[str]) -> None:
    stack = [(node, path)]
    while stack:
        current, prefix = stack.pop()
        here = f"{prefix}{PATH_SEPARATOR}{current.label}" if prefix else current.label
        if not current.children:
            lines.append(f"[{here}] Complexity => {current.complexity}")
            continue
        stack.extend((child, here) for child in reversed(current.children))


def render_text(tree: ComplexityNode) -> str:
    lines = [f"{tree.kind}: {tree.name}"]
    for child in tree.children:
        _leaf_lines(child, tree.label, lines)
    return "\n".join(lines) + "\n\n"


def render_graph(graph: Graph, label: str) -> str:
    lines = [
        f"File: {label}",
        repr(graph),
        f"Complexity => {graph.complexity()}",
    ]
    return "\n".join(lines) + "\n\n"


def format_text(reports: Iterable[FileReport]) -> str:
    chunks = []
    for report in reports:
        if report.tree is not None:
            chunks.append(render_text(report.tree))
        if report.graph is not None:
            chunks.append(render_graph(report.graph, report.path))
    return "".join(chunks)


def _graph_dict(graph: Graph) -> dict:
    return {
        "connected_components": graph.connected_components,
        "nodes": graph.node_count,
        "edges": graph.edge_count,
        "complexity": graph.complexity(),
    }


def _symbols(tree: ComplexityNode) -> List[dict]:
    symbols = []
    stack = [(tree, [])]
    while stack:
        node, ancestry = stack.pop()
        here = ancestry + [node.label]
        if not node.children and node is not tree:
            symbols.append(
                {
                    "path": PATH_SEPARATOR.join(here),
                    "kind": node.kind.value,
                    "name": node.name,
                    "complexity": node.complexity,
                    "mccabe": node.mccabe,
                }
            )
        stack.extend((child, here) for child in reversed(node.children))
    return symbols


def format_json(reports: Iterable[FileReport]) -> str:
    files = []
    for report in reports:
        entry: dict = {"path": report.path}
        if report.tree is not None:
            entry["tree"] = report.tree.to_dict()
            entry["symbols"] = _symbols(report.tree)
            entry["total_complexity"] = report.tree.total_complexity
        if report.graph is not None:
            entry["graph"] = _graph_dict(report.graph)
        files.append(entry)
    data = {
        "summary": {
            "files": len(files),
        },
        "files": files,
    }
    return json.dumps(data, indent=2)
