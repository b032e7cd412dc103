"""Service layer: schema introspection, coercion strategies, and the walker.

Services may import from domain and infrastructure layers.
They must never import from commands or cli.
"""
