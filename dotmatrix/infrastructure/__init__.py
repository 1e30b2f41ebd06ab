"""Infrastructure Layer — substrate file I/O and logging setup.

Invariants:
    - Only this layer and services/ touch the filesystem
"""
