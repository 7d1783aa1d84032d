"""Core engine of stardestroyer.

Configuration I/O, dependency bookkeeping, file rewriting and the
project-wide block passes.
"""
