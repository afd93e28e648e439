"""
Utility Functions

Stateless helpers shared by the service layer.

Modules:
========
- cursor: Opaque keyset pagination tokens
"""

from mylist.shared.utils.cursor import CursorPosition, decode_cursor, encode_cursor

__all__ = [
    "CursorPosition",
    "decode_cursor",
    "encode_cursor",
]
