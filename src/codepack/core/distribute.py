# src/codepack/core/distribute.py
import logging
from typing import List, Sequence

logger = logging.getLogger(__name__)


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def partition(
    indices: Sequence[int],
    weights: Sequence[int],
    requested: int,
) -> List[List[int]]:
    """
    Splits `indices` into at most `requested` contiguous, order-preserving
    slices of roughly equal token weight.

    Boundary b closes once the running total reaches ceil(total * (b+1) / P),
    provided enough files remain to give every later pack at least one. When
    the files left exactly match the packs left, each gets its own pack.
    """
    n = len(indices)
    if n == 0:
        return []
    pack_count = max(1, min(requested, n))
    if pack_count == 1:
        return [list(indices)]

    total = sum(weights[i] for i in indices)
    bins: List[List[int]] = [[]]
    running = 0

    for pos, index in enumerate(indices):
        bins[-1].append(index)
        running += weights[index]

        boundary = len(bins) - 1
        if boundary >= pack_count - 1:
            continue

        files_remaining = n - pos - 1
        packs_remaining = pack_count - len(bins)
        target = _ceil_div(total * (boundary + 1), pack_count)
        if files_remaining == packs_remaining or (
            running >= target and files_remaining >= packs_remaining
        ):
            bins.append([])

    return [b for b in bins if b]


def doc_pack_share(requested: int, doc_tokens: int, total_tokens: int) -> int:
    """round(requested * doc_tokens / total_tokens), halves rounded up, clamped to [1, requested-1]."""
    share = (2 * requested * doc_tokens + total_tokens) // (2 * total_tokens)
    return min(max(share, 1), requested - 1)


def distribute(
    docs: Sequence[int],
    code: Sequence[int],
    weights: Sequence[int],
    requested: int,
) -> List[List[int]]:
    """Distributes documentation and code into packs, documentation first."""
    doc_tokens = sum(weights[i] for i in docs)
    total = doc_tokens + sum(weights[i] for i in code)

    if not docs or not code or requested <= 1 or total == 0:
        return partition(list(docs) + list(code), weights, requested)

    doc_packs = doc_pack_share(requested, doc_tokens, total)
    code_packs = requested - doc_packs
    logger.debug(
        "Mixed distribution: %d doc pack(s), %d code pack(s) for %d/%d tokens",
        doc_packs, code_packs, doc_tokens, total,
    )
    return partition(docs, weights, doc_packs) + partition(code, weights, code_packs)
