"""Service layer: struct loading and target inspection.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
