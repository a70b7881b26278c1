from .base import CompletionProvider
from .gemini_provider import GeminiProvider
from .factory import create_provider

__all__ = [
    "CompletionProvider",
    "GeminiProvider",
    "create_provider",
]
