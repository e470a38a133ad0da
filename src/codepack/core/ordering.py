# src/codepack/core/ordering.py
import heapq
import logging
from typing import List, Sequence, Tuple

from codepack.config import DOC_EXTENSIONS, DOC_PRIORITY_PREFIXES
from codepack.core.graph import DependencyGraph

logger = logging.getLogger(__name__)


def topological_order(graph: DependencyGraph) -> List[int]:
    """
    Orders file indices so that dependencies precede dependents.

    Ties are broken by (normalized path, index), so the result does not depend
    on input order. Files caught in a cycle are appended at the end, sorted by
    path.
    """
    paths = graph.normalized_paths
    indegree = list(graph.indegree)
    ready: List[Tuple[str, int]] = [(paths[i], i) for i, d in enumerate(indegree) if d == 0]
    heapq.heapify(ready)

    order: List[int] = []
    emitted = [False] * len(paths)
    while ready:
        _, index = heapq.heappop(ready)
        order.append(index)
        emitted[index] = True
        for dependent in graph.dependents[index]:
            indegree[dependent] -= 1
            if indegree[dependent] == 0:
                heapq.heappush(ready, (paths[dependent], dependent))

    if len(order) < len(paths):
        leftover = sorted((paths[i], i) for i, done in enumerate(emitted) if not done)
        logger.debug("Cycle fallback: appending %d files in path order", len(leftover))
        order.extend(i for _, i in leftover)

    return order


def extension_of(path: str) -> str:
    name = path.rpartition("/")[2]
    stem, dot, ext = name.rpartition(".")
    return ext.lower() if dot and stem else ""


def is_documentation(path: str) -> bool:
    return extension_of(path) in DOC_EXTENSIONS


def doc_priority(path: str) -> Tuple[int, str]:
    """Sort key for documentation: README, then overview-style docs, then docs/ folders, then the rest."""
    lowered = path.lower()
    basename = lowered.rpartition("/")[2]
    if basename.startswith("readme"):
        bucket = 0
    elif basename.startswith(DOC_PRIORITY_PREFIXES):
        bucket = 1
    elif lowered.startswith("docs/") or "/docs/" in lowered:
        bucket = 2
    else:
        bucket = 3
    return bucket, lowered


def split_docs_and_code(
    order: Sequence[int],
    normalized_paths: Sequence[str],
) -> Tuple[List[int], List[int]]:
    docs = [i for i in order if is_documentation(normalized_paths[i])]
    code = [i for i in order if not is_documentation(normalized_paths[i])]
    docs.sort(key=lambda i: doc_priority(normalized_paths[i]))
    return docs, code
