from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from cyclomatic.analysis.complexity_tree import ComplexityNode, generate
from cyclomatic.analysis.graph import Graph
from cyclomatic.analysis.graph_builder import build_graph
from cyclomatic.core.config import Config
from cyclomatic.parsing.treesitter import ParsedFile, parse_file, parse_source
from cyclomatic.utils.files import iter_source_files


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileReport:
    path: str
    tree: Optional[ComplexityNode] = None
    graph: Optional[Graph] = None

    def worst(self) -> int:
        """Highest value the threshold is compared against."""
        if self.graph is not None:
            return self.graph.complexity()
        if self.tree is None or not self.tree.children:
            return 0
        return max(leaf.complexity for leaf in self.tree.leaves())


class AnalysisEngine:
    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config.load(None)

    def analyze(self, path: str) -> List[FileReport]:
        """Analyze a file or every source file below a directory."""
        if not Path(path).exists():
            raise FileNotFoundError(f"No such file or directory: {path}")
        return list(self.iter_reports(path))

    def iter_reports(self, path: str) -> Iterator[FileReport]:
        files = iter_source_files(path, self.config.extensions(), self.config.ignored_dirs())
        for file_path in files:
            yield self.analyze_parsed(parse_file(file_path))

    def analyze_source(self, source: str, path: str = "<string>") -> FileReport:
        return self.analyze_parsed(parse_source(source, path=path))

    def analyze_parsed(self, parsed: ParsedFile) -> FileReport:
        if self.config.mode() == "graph":
            graph = build_graph(parsed)
            logger.info("%s: %r", parsed.path, graph)
            return FileReport(path=parsed.path, graph=graph)
        return FileReport(path=parsed.path, tree=generate(parsed, parsed.path))

    def exceeding(self, reports: List[FileReport]) -> List[FileReport]:
        limit = self.config.max_complexity()
        if limit is None:
            return []
        return [report for report in reports if report.worst() > limit]
