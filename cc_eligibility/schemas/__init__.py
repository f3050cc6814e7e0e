"""Pydantic Schemas — host input/output documents validated at the HTTP boundary.

Invariants:
    - Schemas validate at system boundary only; core/ works on plain mappings
    - Field aliases mirror the host's camelCase GraphQL shape exactly

Design Decisions:
    - Separate from core: schemas are wire contracts, core types are domain logic
"""
