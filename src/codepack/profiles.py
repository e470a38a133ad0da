# src/codepack/profiles.py
from dataclasses import dataclass
from typing import Dict, Tuple

from codepack.utils.tokenizer import Tokenizer


@dataclass(frozen=True)
class LLMProfile:
    id: str
    name: str
    context_window_tokens: int
    max_file_attachments: int
    tokenizer: str  # "cl100k" | "o200k" | "gemini" | "claude"


LLM_PROFILES: Tuple[LLMProfile, ...] = (
    LLMProfile("claude-opus-4", "Anthropic Claude (Opus 4)", 200_000, 20, "claude"),
    LLMProfile("claude-sonnet-4", "Anthropic Claude (Sonnet 4)", 200_000, 20, "claude"),
    LLMProfile("gemini-2-5-pro", "Google Gemini 2.5 Pro", 1_048_576, 20, "gemini"),
    LLMProfile("gemini-2-0-flash", "Google Gemini 2.0 Flash", 1_048_576, 20, "gemini"),
    LLMProfile("chatgpt-4o", "OpenAI ChatGPT-4o", 128_000, 20, "o200k"),
    LLMProfile("chatgpt-o3", "OpenAI o3", 200_000, 20, "o200k"),
    LLMProfile("chatgpt-o4-mini", "OpenAI o4-mini", 200_000, 20, "o200k"),
)

PROFILES_BY_ID: Dict[str, LLMProfile] = {p.id: p for p in LLM_PROFILES}


def get_profile(profile_id: str) -> LLMProfile:
    """Looks up a profile, falling back to the first one for unknown ids."""
    return PROFILES_BY_ID.get(profile_id, LLM_PROFILES[0])


def tokenizer_encoding(profile: LLMProfile) -> str:
    if profile.tokenizer == "o200k":
        return "o200k_base"
    return "cl100k_base"


def is_approximate_tokenizer(profile: LLMProfile) -> bool:
    # No public BPE for these vendors, so their counts are labelled approximate.
    return profile.tokenizer in ("claude", "gemini")


def tokenizer_for(profile: LLMProfile) -> Tokenizer:
    """Approximate profiles count conservatively: the max over the known encodings."""
    return Tokenizer(tokenizer_encoding(profile), conservative=is_approximate_tokenizer(profile))
