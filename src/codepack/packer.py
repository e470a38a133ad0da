# src/codepack/packer.py
"""
Packing engine entry point.

`pack_files` is a pure function of its request: it extracts import
references, orders files so dependencies come first, puts documentation
ahead of code, keeps import-connected code together and cuts the result
into token-balanced packs. It performs no I/O.
"""
import logging
from typing import List, Sequence

from codepack.core.distribute import distribute
from codepack.core.formatter import render_pack
from codepack.core.graph import build_dependency_graph
from codepack.core.grouping import group_connected
from codepack.core.ordering import split_docs_and_code, topological_order
from codepack.models import OutputFormat, Pack, PackRequest, PackResponse, SourceFile
from codepack.utils.tokenizer import effective_token_count

logger = logging.getLogger(__name__)


def plan_packs(
    files: Sequence[SourceFile],
    weights: Sequence[int],
    requested_pack_count: int,
) -> List[List[int]]:
    """Returns the file indices of each pack, in output order."""
    if not files:
        return []

    graph = build_dependency_graph(files)
    order = topological_order(graph)
    docs, code = split_docs_and_code(order, graph.normalized_paths)
    grouped_code = group_connected(code, graph.related)
    return distribute(docs, grouped_code, weights, requested_pack_count)


def pack_files(request: PackRequest) -> PackResponse:
    files = list(request.files)
    if not files:
        return PackResponse(packs=(), total_tokens=0)

    fmt = OutputFormat(request.output_format)
    weights = [effective_token_count(f) for f in files]
    bins = plan_packs(files, weights, request.requested_pack_count)

    packs = []
    for bin_indices in bins:
        members = [files[i] for i in bin_indices]
        packs.append(
            Pack(
                index=len(packs),
                file_indices=tuple(bin_indices),
                file_paths=tuple(f.path for f in members),
                token_total=sum(weights[i] for i in bin_indices),
                content=render_pack(members, fmt),
            )
        )

    logger.debug("Packed %d files into %d pack(s)", len(files), len(packs))
    return PackResponse(packs=tuple(packs), total_tokens=sum(weights))
