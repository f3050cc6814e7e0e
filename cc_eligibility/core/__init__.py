"""Core Layer — pure eligibility logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or schemas/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: checks return a trace,
      the service layer decides what to log
"""
