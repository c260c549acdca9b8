"""Service layer: query logic returning ServiceResult.

Services may import from domain, infrastructure and cascade.
They must never import from commands or output.
"""
