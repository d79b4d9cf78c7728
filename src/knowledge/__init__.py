"""
Static entity catalogs and the registries built from them.

Each catalog is the universe of valid ids for one entity type; resolvers
never return an id that is not in its registry.
"""

__all__ = [
    "entity_registry",
]
