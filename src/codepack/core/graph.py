# src/codepack/core/graph.py
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Sequence, Set, Tuple

from codepack.core.imports import extract_specifiers
from codepack.core.resolver import normalize_path, resolve_specifier
from codepack.models import SourceFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyGraph:
    """
    File-level import graph, keyed by input index.

    `dependents[i]` lists the files that import file i (edges point from a
    dependency to its dependent). `indegree[i]` is the number of distinct
    files that file i imports. `related` is the same relation, undirected.
    """
    normalized_paths: Tuple[str, ...]
    dependents: Tuple[Tuple[int, ...], ...]
    indegree: Tuple[int, ...]
    related: Tuple[FrozenSet[int], ...]

    @property
    def edge_count(self) -> int:
        return sum(len(d) for d in self.dependents)


def build_path_index(normalized_paths: Sequence[str]) -> Dict[str, int]:
    """Maps normalized path to file index. The first file wins on duplicates."""
    index: Dict[str, int] = {}
    for i, path in enumerate(normalized_paths):
        index.setdefault(path, i)
    return index


def build_dependency_graph(files: Sequence[SourceFile]) -> DependencyGraph:
    normalized = tuple(normalize_path(f.path) for f in files)
    path_index = build_path_index(normalized)

    dependents: List[List[int]] = [[] for _ in files]
    indegree = [0] * len(files)
    related: List[Set[int]] = [set() for _ in files]
    seen_edges: Set[Tuple[int, int]] = set()

    for dependent, file in enumerate(files):
        for specifier in sorted(extract_specifiers(file.content)):
            dependency = resolve_specifier(specifier, normalized[dependent], path_index)
            if dependency is None or dependency == dependent:
                continue

            edge = (dependency, dependent)
            if edge not in seen_edges:
                seen_edges.add(edge)
                dependents[dependency].append(dependent)
                indegree[dependent] += 1

            related[dependency].add(dependent)
            related[dependent].add(dependency)

    logger.debug("Dependency graph: %d files, %d edges", len(files), len(seen_edges))

    return DependencyGraph(
        normalized_paths=normalized,
        dependents=tuple(tuple(d) for d in dependents),
        indegree=tuple(indegree),
        related=tuple(frozenset(r) for r in related),
    )
