"""Domain layer for Atomize.

Pure models and functions: no I/O, no side effects.
"""
