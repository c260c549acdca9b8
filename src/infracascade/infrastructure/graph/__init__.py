"""Dependency graph model, builder and cache."""
