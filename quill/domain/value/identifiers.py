"""Strongly typed identifiers for Quill domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType

# Generated by the database on insert
PostId = NewType("PostId", int)
CategoryId = NewType("CategoryId", int)

# Owned by the external authentication service
UserId = NewType("UserId", str)
