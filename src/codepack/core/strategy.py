# src/codepack/core/strategy.py
"""
Content preparation ahead of packing.

Applies the optional content transforms, assigns token counts, and splits
files that exceed the advisory per-file budget into numbered parts so the
distributor has finer-grained pieces to balance.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from codepack.config import (
    ADVISORY_WARN_RATIO,
    ADVISORY_WINDOW_RATIO,
    APPROX_CHARS_PER_TOKEN,
    MAX_ADVISORY_TOKENS_PER_FILE,
    MIN_ADVISORY_TOKENS_PER_FILE,
    MIN_BREAK_SCAN_RATIO,
)
from codepack.core.ordering import extension_of
from codepack.core.transforms import minify_markdown, reduce_whitespace, strip_comments
from codepack.models import PackOptions, SourceFile
from codepack.utils.tokenizer import Tokenizer, effective_token_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OversizedFile:
    path: str
    token_count: int


@dataclass(frozen=True)
class SplitResult:
    files: List[SourceFile]
    oversized_files: List[OversizedFile]
    advisory_max_tokens_per_file: int
    warnings: List[str] = field(default_factory=list)
    split_file_count: int = 0
    generated_part_count: int = 0


@dataclass(frozen=True)
class PackAdvisory:
    avg_tokens_per_pack: float
    advisory_max_tokens_per_file: int
    utilization: float
    level: str  # "ok" | "warn" | "danger"
    message: str


def format_token_count(tokens: int) -> str:
    if tokens >= 1_000_000:
        return f"{tokens / 1_000_000:.1f}M"
    if tokens >= 1_000:
        return f"{tokens / 1_000:.1f}k"
    return str(tokens)


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def derive_advisory_max_tokens_per_file(context_window_tokens: int) -> int:
    scaled = _round_half_up(context_window_tokens * ADVISORY_WINDOW_RATIO)
    return min(MAX_ADVISORY_TOKENS_PER_FILE, max(MIN_ADVISORY_TOKENS_PER_FILE, scaled))


def resolve_advisory_max_tokens_per_file(
    configured: Optional[float],
    context_window_tokens: int,
) -> int:
    if configured is None or configured <= 0:
        return derive_advisory_max_tokens_per_file(context_window_tokens)
    return max(1, _round_half_up(configured))


def find_oversized_files(files: Sequence[SourceFile], max_tokens_per_file: int) -> List[OversizedFile]:
    if max_tokens_per_file <= 0:
        return []
    oversized = []
    for f in files:
        tokens = effective_token_count(f)
        if tokens > max_tokens_per_file:
            oversized.append(OversizedFile(f.path, tokens))
    return oversized


def split_content_by_token_budget(content: str, max_tokens_per_file: int) -> List[str]:
    """
    Cuts `content` into chunks of at most max_tokens * 4 characters, preferring
    a paragraph break, then a line break, found past the first 35% of a chunk.
    """
    if max_tokens_per_file <= 0:
        return [content]
    max_chars = max(1, max_tokens_per_file * APPROX_CHARS_PER_TOKEN)
    if len(content) <= max_chars:
        return [content]

    min_break_offset = int(max_chars * MIN_BREAK_SCAN_RATIO)
    chunks = []
    cursor = 0
    while cursor < len(content):
        split_at = min(cursor + max_chars, len(content))
        if split_at < len(content):
            paragraph = content.rfind("\n\n", 0, split_at + 2)
            line = content.rfind("\n", 0, split_at + 1)
            if paragraph >= cursor + min_break_offset:
                split_at = paragraph + 2
            elif line >= cursor + min_break_offset:
                split_at = line + 1
        chunks.append(content[cursor:split_at])
        cursor = split_at
    return chunks


def part_path(path: str, part_index: int, part_count: int) -> str:
    """src/big.ts -> src/big.part-1-of-3.ts"""
    slash = max(path.rfind("/"), path.rfind("\\"))
    directory, name = path[: slash + 1], path[slash + 1:]
    suffix = f".part-{part_index + 1}-of-{part_count}"
    dot = name.rfind(".")
    if dot <= 0:
        return f"{directory}{name}{suffix}"
    return f"{directory}{name[:dot]}{suffix}{name[dot:]}"


def oversized_files_warning(oversized: Sequence[OversizedFile], max_tokens_per_file: int) -> Optional[str]:
    if not oversized:
        return None
    examples = ", ".join(
        f"{f.path} (~{format_token_count(f.token_count)})" for f in oversized[:3]
    )
    more = f" +{len(oversized) - 3} more" if len(oversized) > 3 else ""
    return (
        f"Some files exceed the advisory per-file limit of {format_token_count(max_tokens_per_file)} tokens. "
        "Large single files can reduce LLM reliability and increase hallucination risk. "
        "Consider selecting fewer files. "
        f"Oversized: {examples}{more}."
    )


def split_oversized_files(
    files: Sequence[SourceFile],
    max_tokens_per_file: int,
    tokenizer: Optional[Tokenizer] = None,
) -> SplitResult:
    advisory_max = max(1, max_tokens_per_file)
    oversized = find_oversized_files(files, advisory_max)
    if not oversized:
        return SplitResult(list(files), [], advisory_max)

    oversized_paths = {f.path for f in oversized}
    transformed: List[SourceFile] = []
    split_file_count = 0
    generated_part_count = 0

    for f in files:
        if f.path not in oversized_paths:
            transformed.append(f)
            continue

        chunks = split_content_by_token_budget(f.content, advisory_max)
        if len(chunks) <= 1:
            transformed.append(f)
            continue

        split_file_count += 1
        generated_part_count += len(chunks)
        for i, chunk in enumerate(chunks):
            count = tokenizer.count(chunk) if tokenizer else None
            transformed.append(SourceFile(part_path(f.path, i, len(chunks)), chunk, count))
        logger.debug("Split %s into %d parts", f.path, len(chunks))

    warnings = []
    warning = oversized_files_warning(oversized, advisory_max)
    if warning:
        warnings.append(warning)
    if split_file_count:
        warnings.append(
            f"Auto-balance enabled: split {split_file_count} oversized file(s) into "
            f"{generated_part_count} part(s) to better balance pack sizes."
        )

    return SplitResult(
        files=transformed,
        oversized_files=oversized,
        advisory_max_tokens_per_file=advisory_max,
        warnings=warnings,
        split_file_count=split_file_count,
        generated_part_count=generated_part_count,
    )


def forecast_split_part_counts(files: Sequence[SourceFile], max_tokens_per_file: int) -> Dict[str, int]:
    """Predicts how many parts each oversized file would be split into."""
    counts: Dict[str, int] = {}
    if max_tokens_per_file <= 0:
        return counts
    for f in files:
        tokens = effective_token_count(f)
        if tokens > max_tokens_per_file:
            counts[f.path] = max(2, -(-tokens // max_tokens_per_file))
    return counts


def evaluate_per_pack_advisory(
    total_tokens: int,
    num_packs: int,
    advisory_max_tokens_per_file: int,
) -> PackAdvisory:
    safe_max = max(1, advisory_max_tokens_per_file)
    avg = total_tokens / max(1, num_packs)
    utilization = avg / safe_max

    if utilization >= 1:
        level = "danger"
        message = (
            "Advisory exceeded: average tokens per pack are above the recommended "
            "per-file budget. Increase packs or select fewer files."
        )
    elif utilization >= ADVISORY_WARN_RATIO:
        level = "warn"
        message = (
            "Approaching advisory limit: average tokens per pack are close to the "
            "recommended per-file budget."
        )
    else:
        level = "ok"
        message = (
            "Within advisory: average tokens per pack are under the recommended "
            "per-file budget."
        )
    return PackAdvisory(avg, safe_max, utilization, level, message)


def transform_content(file: SourceFile, options: PackOptions) -> str:
    ext = extension_of(file.path.replace("\\", "/"))
    content = file.content
    if options.strip_comments:
        content = strip_comments(content, ext)
    if options.reduce_whitespace:
        content = reduce_whitespace(content)
    if options.minify_markdown and ext == "md":
        content = minify_markdown(
            content,
            options.strip_markdown_headings,
            options.strip_markdown_blockquotes,
        )
    return content


def prepare_files(
    files: Sequence[SourceFile],
    options: PackOptions,
    tokenizer: Optional[Tokenizer] = None,
) -> List[SourceFile]:
    """Applies content transforms and (re)counts tokens with `tokenizer` when given."""
    prepared = []
    for f in files:
        content = transform_content(f, options)
        count = tokenizer.count(content) if tokenizer else None
        prepared.append(SourceFile(f.path, content, count))
    return prepared
