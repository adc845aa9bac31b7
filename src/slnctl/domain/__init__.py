"""Domain layer — solution model, folder derivation, membership rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
