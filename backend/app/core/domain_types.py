"""Domain Types — identity type for the single User entity.

Invariants:
    - UserId wraps int — server-assigned, positive in practice, immutable

Design Decisions:
    - NewType over a wrapper class: zero runtime cost, full type-checker support
"""

from typing import NewType


UserId = NewType("UserId", int)
