"""
Sherlock backend: root package.

FastAPI app entry point (main.py), API routes, the face recognition pipeline
(identity resolution, headshot capture, visual context fan-out to the voice
agent), and MongoDB persistence.
"""
