"""Infrastructure Layer — cross-cutting concerns shared by the shell.

Invariants:
    - Infrastructure never imports from core/ domain logic
"""
