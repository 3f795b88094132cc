"""
Graph and decision-point complexity measures.
"""

from cyclomatic.analysis.complexity_tree import ComplexityKind, ComplexityNode, generate
from cyclomatic.analysis.decision_points import count_decision_points
from cyclomatic.analysis.graph import Edge, Graph
from cyclomatic.analysis.graph_builder import GraphBuilder, build_graph
from cyclomatic.analysis.identity import NodeIdentity, identity

__all__ = [
    "ComplexityKind",
    "ComplexityNode",
    "Edge",
    "Graph",
    "GraphBuilder",
    "NodeIdentity",
    "build_graph",
    "count_decision_points",
    "generate",
    "identity",
]
