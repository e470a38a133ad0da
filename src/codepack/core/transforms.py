# src/codepack/core/transforms.py
import re
from typing import List

C_STYLE_EXTENSIONS = {"ts", "tsx", "js", "jsx", "rs", "go", "c", "cpp", "h", "cs", "java"}
HASH_COMMENT_EXTENSIONS = {"py", "rb", "sh", "bash", "yaml", "yml", "toml", "r"}
DASH_COMMENT_EXTENSIONS = {"sql", "lua"}

_DOCSTRING_RE = re.compile(r'"""[\s\S]*?"""|\'\'\'[\s\S]*?\'\'\'')
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_BADGE_RE = re.compile(r"\[!\[.*?\]\(.*?\)\]\(.*?\)")
_HTML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_HTML_BLOCK_RE = re.compile(
    r"<(div|details|summary|table|thead|tbody|tr|td|th)[^>]*>[\s\S]*?</\1>", re.IGNORECASE
)
_HTML_VOID_RE = re.compile(r"<(img|br|hr)[^>]*/?>", re.IGNORECASE)
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_HEADING_RE = re.compile(r"^#{1,6}\s+.*$", re.MULTILINE)
_BLOCKQUOTE_RE = re.compile(r"^>\s?.*$", re.MULTILINE)


def _strip_delimited(content: str, line_marker: str, quotes: str, block: bool) -> str:
    """
    Removes line comments (and /* */ blocks when `block` is set) while leaving
    string literals untouched. Backtick literals may span lines; the others
    end at a newline.
    """
    out: List[str] = []
    quote = None
    i = 0
    n = len(content)
    while i < n:
        c = content[i]
        if quote:
            out.append(c)
            if c == "\\" and i + 1 < n:
                out.append(content[i + 1])
                i += 2
                continue
            if c == quote or (c == "\n" and quote != "`"):
                quote = None
            i += 1
            continue

        if c in quotes:
            quote = c
            out.append(c)
            i += 1
        elif content.startswith(line_marker, i):
            end = content.find("\n", i)
            if end == -1:
                break
            i = end
        elif block and content.startswith("/*", i):
            end = content.find("*/", i + 2)
            if end == -1:
                break
            i = end + 2
        else:
            out.append(c)
            i += 1
    return "".join(out)


def _find_hash_comment(line: str) -> int:
    in_single = in_double = False
    for i, c in enumerate(line):
        if c == "'" and not in_double:
            in_single = not in_single
        elif c == '"' and not in_single:
            in_double = not in_double
        elif c == "#" and not in_single and not in_double:
            return i
    return -1


def _strip_hash_comments(content: str) -> str:
    lines = []
    for number, line in enumerate(content.split("\n")):
        if number == 0 and line.startswith("#!"):
            lines.append(line)
            continue
        start = _find_hash_comment(line)
        lines.append(line if start == -1 else line[:start].rstrip())
    return "\n".join(lines)


def strip_comments(content: str, extension: str) -> str:
    ext = extension.lower().lstrip(".")
    if ext in C_STYLE_EXTENSIONS:
        return _strip_delimited(content, "//", "'\"`", block=True)
    if ext in HASH_COMMENT_EXTENSIONS:
        result = _strip_hash_comments(content)
        if ext == "py":
            result = _DOCSTRING_RE.sub("", result)
        return result
    if ext in DASH_COMMENT_EXTENSIONS:
        return _strip_delimited(content, "--", "'\"", block=False)
    return content


def reduce_whitespace(content: str) -> str:
    """Collapses blank-line runs, trims line ends and the whole text."""
    result = _BLANK_RUN_RE.sub("\n\n", content)
    result = "\n".join(line.rstrip() for line in result.split("\n"))
    return result.strip()


def minify_markdown(
    content: str,
    strip_headings: bool = False,
    strip_blockquotes: bool = False,
) -> str:
    result = _BADGE_RE.sub("", content)
    result = _HTML_COMMENT_RE.sub("", result)
    result = _HTML_BLOCK_RE.sub("", result)
    result = _HTML_VOID_RE.sub("", result)
    result = _HTML_TAG_RE.sub("", result)
    result = _BLANK_RUN_RE.sub("\n\n", result)

    if strip_headings:
        result = _HEADING_RE.sub("", result)
    if strip_blockquotes:
        result = _BLOCKQUOTE_RE.sub("", result)

    return result.strip()
