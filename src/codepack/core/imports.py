# src/codepack/core/imports.py
"""
Best-effort, line-based extraction of module references from source text.

This is a lexical heuristic, not a parser: it looks for import-like lines in
any language and pulls out the literal strings (or dotted names) they refer
to. Unusual syntax may be missed or over-matched.
"""
import re
from typing import Iterator, List, Set

from codepack.config import COMMENT_PREFIXES, IMPORT_MARKERS

_FROM_IMPORT_RE = re.compile(r"^from\s+(\.*)([A-Za-z_][\w.]*)?\s+import\b")
_PLAIN_IMPORT_RE = re.compile(r"^import\s+(.+)$")
_RUST_MOD_RE = re.compile(r"^(?:pub(?:\([^)]*\))?\s+)?mod\s+([A-Za-z_]\w*)\s*;")


def iter_quoted_literals(line: str) -> Iterator[str]:
    """Yields every terminated '...' or "..." literal on the line."""
    i = 0
    n = len(line)
    while i < n:
        quote = line[i]
        if quote not in ("'", '"'):
            i += 1
            continue

        chars: List[str] = []
        j = i + 1
        terminated = False
        while j < n:
            c = line[j]
            if c == "\\" and j + 1 < n:
                chars.append(line[j + 1])
                j += 2
                continue
            if c == quote:
                terminated = True
                break
            chars.append(c)
            j += 1

        if not terminated:
            # Unterminated quote swallows the rest of the line
            return
        if chars:
            yield "".join(chars)
        i = j + 1


def _python_from_target(dots: str, dotted: str) -> str:
    path = dotted.replace(".", "/")
    if not dots:
        return path
    prefix = "./" if len(dots) == 1 else "../" * (len(dots) - 1)
    return prefix + path


def _plain_import_targets(names: str) -> Iterator[str]:
    for part in names.split(","):
        tokens = part.split()
        if not tokens:
            continue
        token = tokens[0].rstrip(";")
        if not token or token.startswith(("{", "*")):
            continue
        yield token.replace(".", "/")


def extract_specifiers(text: str) -> Set[str]:
    """Returns the set of unique module specifiers referenced by `text`."""
    specifiers: Set[str] = set()

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        if any(marker in line for marker in IMPORT_MARKERS):
            specifiers.update(iter_quoted_literals(line))

        match = _FROM_IMPORT_RE.match(line)
        if match:
            dots, dotted = match.group(1), match.group(2)
            if dotted:
                specifiers.add(_python_from_target(dots, dotted))
            continue

        match = _PLAIN_IMPORT_RE.match(line)
        if match and "'" not in line and '"' not in line and " from " not in line:
            specifiers.update(_plain_import_targets(match.group(1)))
            continue

        match = _RUST_MOD_RE.match(line)
        if match:
            specifiers.add(f"./{match.group(1)}")

    return specifiers
