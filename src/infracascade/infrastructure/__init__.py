"""Infrastructure layer: catalog loading and the dependency graph.

Depends on the domain layer only.
"""
