"""Utility modules: datetime handling, face embeddings, headshot images, bounded awaits."""
