"""Domain layer: kinds, literal parsers, and the annotation micro-languages.

This layer depends only on stdlib and pydantic. It must never import from services,
infrastructure, commands, or config.
"""
