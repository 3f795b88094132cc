"""
tree-sitter front end for Rust.
"""

from cyclomatic.parsing.treesitter import ParsedFile, parse_file, parse_source

__all__ = ["ParsedFile", "parse_file", "parse_source"]
