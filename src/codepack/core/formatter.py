# src/codepack/core/formatter.py
from typing import Sequence

from codepack.config import LANGUAGE_BY_EXTENSION
from codepack.models import OutputFormat, SourceFile


def language_for(path: str) -> str:
    """Fence language for a path; the extension match is case-sensitive."""
    name = path.replace("\\", "/").rpartition("/")[2]
    stem, dot, ext = name.rpartition(".")
    if not (dot and stem):
        return "text"
    return LANGUAGE_BY_EXTENSION.get(ext, "text")


def render_file(file: SourceFile, fmt: OutputFormat) -> str:
    fmt = OutputFormat(fmt)
    if fmt == OutputFormat.MARKDOWN:
        return f"```{language_for(file.path)}\n// {file.path}\n{file.content}\n```"
    if fmt == OutputFormat.XML:
        return f'<document path="{file.path}">\n{file.content}\n</document>'
    return f"// ===== {file.path} =====\n{file.content}"


def render_pack(files: Sequence[SourceFile], fmt: OutputFormat) -> str:
    """Renders the files of one pack into a single text blob."""
    fmt = OutputFormat(fmt)
    separator = "\n" if fmt == OutputFormat.XML else "\n\n"
    body = separator.join(render_file(f, fmt) for f in files)
    if fmt == OutputFormat.XML:
        return f"<documents>\n{body}\n</documents>"
    return body
