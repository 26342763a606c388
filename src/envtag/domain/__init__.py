"""Domain layer: variable types, rules, validation, and resolution.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
