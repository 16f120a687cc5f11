"""Core Layer — pure domain logic, no IO, no DB, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic except oauth_state token generation (CSPRNG)

Design Decisions:
    - Functional core separated from imperative shell: stores and routes
      orchestrate IO around these helpers
"""
