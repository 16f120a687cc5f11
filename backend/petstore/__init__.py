"""Petstore Application Package — pets API with pluggable storage and Google sign-in.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
