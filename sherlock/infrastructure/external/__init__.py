"""External service clients"""

from .headshot_embedder import HeadshotEmbedder

__all__ = [
    "HeadshotEmbedder",
]
