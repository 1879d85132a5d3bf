"""Infrastructure Layer — cross-cutting concerns for the shell (logging, clock).

Invariants:
    - Infrastructure never imports from core/ domain logic

Design Decisions:
    - Wall-clock access isolated here so the core stays deterministic
"""
