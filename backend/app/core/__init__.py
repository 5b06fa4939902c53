"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - Validation functions are pure and deterministic

Design Decisions:
    - Functional core separated from the HTTP/DB shell: routes orchestrate IO
      around these helpers
"""
