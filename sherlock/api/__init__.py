"""
API layer for the Sherlock backend.

Exposes HTTP and WebSocket endpoints under /api/v1 (identities, events,
sessions, observations, voice agent, media).
"""
