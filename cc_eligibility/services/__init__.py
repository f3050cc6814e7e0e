"""Services Layer — the imperative shell around the pure eligibility core.

Invariants:
    - Services call core/ and own every log line about an evaluation
    - Services never change a decision produced by core/
"""
