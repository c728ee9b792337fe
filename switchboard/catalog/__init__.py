"""
Integration catalog.

Declarative per-app schemas (``apps/*.yaml``) plus the registry, integrity
checks, visibility rules and request templates that operate on them.
"""
