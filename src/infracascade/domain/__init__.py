"""Domain layer: catalogs, graph elements, policy and result models.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
