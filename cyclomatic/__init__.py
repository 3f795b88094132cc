"""
McCabe cyclomatic complexity for Rust source files.

Two measures are offered: a structural graph per file, scored with
`E - N + 2P`, and a tree of per-function decision-point counts.
"""

__version__ = "0.1.0"

from cyclomatic.analysis.complexity_tree import ComplexityKind, ComplexityNode, generate
from cyclomatic.analysis.graph import Graph
from cyclomatic.analysis.graph_builder import GraphBuilder, build_graph
from cyclomatic.core.config import Config
from cyclomatic.core.engine import AnalysisEngine
from cyclomatic.core.errors import CyclomaticError, NameResolutionError, ParseFailure

__all__ = [
    "AnalysisEngine",
    "ComplexityKind",
    "ComplexityNode",
    "Config",
    "CyclomaticError",
    "Graph",
    "GraphBuilder",
    "NameResolutionError",
    "ParseFailure",
    "build_graph",
    "generate",
]
