# src/codepack/core/ignore.py
import sys
from pathlib import Path, PurePath
from typing import List, Optional, Sequence, Union

import pathspec

from codepack.config import DEFAULT_IGNORE_PATTERNS, IGNORE_FILE_NAME


def _read_pattern_file(path: Path) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Warning: Could not read {path.name}: {e}", file=sys.stderr)
        return []


def load_ignore_spec(
    root_dir: Path,
    respect_gitignore: bool = True,
    extra_patterns: Optional[Sequence[str]] = None,
) -> pathspec.PathSpec:
    """
    Builds a PathSpec from the default patterns, .gitignore (optional),
    .packignore and any extra patterns (like the output directory).
    Later patterns win, so a '!pattern' in .packignore can re-include a file.
    """
    lines = list(DEFAULT_IGNORE_PATTERNS)

    gitignore_file = root_dir / ".gitignore"
    if respect_gitignore and gitignore_file.is_file():
        lines.extend(_read_pattern_file(gitignore_file))

    packignore_file = root_dir / IGNORE_FILE_NAME
    if packignore_file.is_file():
        lines.extend(_read_pattern_file(packignore_file))

    if extra_patterns:
        lines.extend(extra_patterns)

    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def is_path_ignored(
    rel_path: Union[str, PurePath],
    spec: pathspec.PathSpec,
    is_directory: bool = False,
) -> bool:
    """Checks a root-relative path; directories get a trailing '/' so 'venv/' style rules match."""
    path = rel_path.as_posix() if isinstance(rel_path, PurePath) else str(rel_path).replace("\\", "/")
    if is_directory and not path.endswith("/"):
        path += "/"
    return spec.match_file(path)
