# src/codepack/utils/tokenizer.py
from typing import Dict, Tuple

import tiktoken

from codepack.config import APPROX_CHARS_PER_TOKEN, CONSERVATIVE_ENCODINGS
from codepack.models import SourceFile


def estimate_tokens(text: str) -> int:
    """Cheap estimate used whenever no precomputed count exists: ~4 bytes per token."""
    return max(1, len(text.encode("utf-8")) // APPROX_CHARS_PER_TOKEN)


def effective_token_count(file: SourceFile) -> int:
    if file.token_count is not None:
        return max(0, file.token_count)
    return estimate_tokens(file.content)


class Tokenizer:
    """
    Counts tokens with tiktoken.

    A conservative tokenizer encodes with every encoding in
    CONSERVATIVE_ENCODINGS and reports the largest count; it stands in for
    vendors that publish no BPE of their own.
    """
    _encodings: Dict[str, "tiktoken.Encoding"] = {}

    def __init__(self, encoding_name: str = "cl100k_base", conservative: bool = False):
        self.encoding_name = encoding_name
        self.conservative = conservative

    @property
    def encoding_names(self) -> Tuple[str, ...]:
        return CONSERVATIVE_ENCODINGS if self.conservative else (self.encoding_name,)

    @classmethod
    def get_encoding(cls, name: str) -> "tiktoken.Encoding":
        if name not in cls._encodings:
            try:
                cls._encodings[name] = tiktoken.get_encoding(name)
            except ValueError:
                # Unknown encoding name
                cls._encodings[name] = tiktoken.get_encoding("cl100k_base")
        return cls._encodings[name]

    def count(self, text: str) -> int:
        """Counts tokens for a given text."""
        try:
            return max(
                len(self.get_encoding(name).encode(text, disallowed_special=()))
                for name in self.encoding_names
            )
        except Exception:
            # Fallback estimation strategy (e.g. BPE files cannot be downloaded)
            return estimate_tokens(text)
