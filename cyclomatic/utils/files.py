from __future__ import annotations

from pathlib import Path
from typing import Iterable


def iter_source_files(root: str, extensions: set[str], ignored_dirs: set[str]) -> Iterable[str]:
    root_path = Path(root)
    if root_path.is_file():
        yield str(root_path)
        return
    for path in sorted(root_path.rglob("*")):
        if not path.is_file():
            continue
        if any(part in ignored_dirs for part in path.relative_to(root_path).parts):
            continue
        if path.suffix.lower() not in extensions:
            continue
        yield str(path)
