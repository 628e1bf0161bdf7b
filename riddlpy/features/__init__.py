"""Editor-facing features computed from a token stream."""

from riddlpy.features.hover import HoverInfo, hover_at, hover_for_token
from riddlpy.features.semantic_tokens import (
    TOKEN_MODIFIERS,
    TOKEN_TYPES,
    SemanticToken,
    classify_tokens,
    encode_semantic_tokens,
    token_type_index,
)

__all__ = [
    "TOKEN_MODIFIERS",
    "TOKEN_TYPES",
    "HoverInfo",
    "SemanticToken",
    "classify_tokens",
    "encode_semantic_tokens",
    "hover_at",
    "hover_for_token",
    "token_type_index",
]
