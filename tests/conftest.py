"""
Shared fixtures for the analyzer tests.
"""

import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cyclomatic.parsing.treesitter import parse_source


@pytest.fixture
def parse():
    """Parse a Rust snippet into a ParsedFile."""
    def _parse(code: str, path: str = "test.rs"):
        return parse_source(code, path=path)
    return _parse


@pytest.fixture
def function_body(parse):
    """Body block of the first function in a snippet."""
    def _body(code: str):
        parsed = parse(code)
        for node in parsed.root.named_children:
            if node.type == "function_item":
                return node.child_by_field_name("body")
        raise AssertionError("snippet has no function")
    return _body


@pytest.fixture
def rust_project(tmp_path):
    """A small crate layout with sources, a stray text file and build output."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.rs").write_text(
        "fn main() {\n"
        "    if ready() {\n"
        "        run();\n"
        "    } else if retry() {\n"
        "        run();\n"
        "    }\n"
        "}\n",
        encoding="utf-8",
    )
    (src / "lib.rs").write_text(
        "use std::io;\n"
        "\n"
        "pub struct Counter { value: u32 }\n"
        "\n"
        "impl Counter {\n"
        "    pub fn bump(&mut self) {\n"
        "        if self.value > 10 {\n"
        "            self.value = 0;\n"
        "        }\n"
        "    }\n"
        "}\n",
        encoding="utf-8",
    )
    (src / "notes.txt").write_text("not rust", encoding="utf-8")
    target = tmp_path / "target" / "debug"
    target.mkdir(parents=True)
    (target / "build.rs").write_text("fn main() { if x { } }\n", encoding="utf-8")
    return tmp_path
