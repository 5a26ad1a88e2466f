"""Domain layer — sections, substitution rules, manifest rendering, errors.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
