# trycore/core/__init__.py
"""
Core types for trycore.

- kinds: failure kinds, the Failure exception, the registry
- dispatch: catch clauses and the dispatch controller
- errors: configuration errors

No side effects on import.
"""
