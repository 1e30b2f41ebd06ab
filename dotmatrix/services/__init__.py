"""Services Layer — orchestrates core validation around substrate I/O.

Invariants:
    - Services never re-implement core rules; each layer calls its own check
    - Routes and the CLI call services, never the kernel directly
"""
