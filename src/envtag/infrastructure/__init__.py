"""Infrastructure layer: field discovery and environment lookups.

This layer depends on stdlib and third-party libs (pydantic, python-dotenv).
It may raise domain error kinds but must never import from services,
commands, or output.
"""
