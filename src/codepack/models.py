# src/codepack/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    PLAINTEXT = "plaintext"
    XML = "xml"

    @classmethod
    def _missing_(cls, value):
        # Anything unrecognised renders as plaintext
        return cls.PLAINTEXT


@dataclass(frozen=True)
class SourceFile:
    """Immutable input file. `path` may use either separator convention."""
    path: str
    content: str
    token_count: Optional[int] = None


@dataclass(frozen=True)
class Pack:
    index: int
    file_indices: Tuple[int, ...]
    file_paths: Tuple[str, ...]
    token_total: int
    content: str

    @property
    def file_count(self) -> int:
        return len(self.file_indices)


@dataclass(frozen=True)
class PackRequest:
    files: Sequence[SourceFile]
    requested_pack_count: int = 1
    output_format: OutputFormat = OutputFormat.PLAINTEXT


@dataclass(frozen=True)
class PackResponse:
    packs: Tuple[Pack, ...] = ()
    total_tokens: int = 0


@dataclass(frozen=True)
class PackOptions:
    """Per-run options collected by the CLI."""
    num_packs: int = 1
    output_format: OutputFormat = OutputFormat.PLAINTEXT
    profile_id: str = "claude-opus-4"
    max_tokens_per_file: Optional[int] = None
    split_oversized: bool = False
    strip_comments: bool = False
    reduce_whitespace: bool = False
    minify_markdown: bool = False
    strip_markdown_headings: bool = False
    strip_markdown_blockquotes: bool = False
    respect_gitignore: bool = True
    ignore_patterns: Tuple[str, ...] = field(default_factory=tuple)
