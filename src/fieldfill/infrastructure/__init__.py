"""Infrastructure layer: key-value sources consulted by selectors.

This layer depends on stdlib only.
It must never import from domain, services, commands, or config.
"""
