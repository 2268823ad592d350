"""Shared in-memory tables for the in-memory repositories."""

from dataclasses import dataclass, field
from itertools import count
from typing import Iterator

from quill.domain.model import Category, Post
from quill.domain.value import CategoryId, PostId


@dataclass
class InMemoryStore:
    """Posts, categories and association rows held in dicts.

    Stored posts carry no categories; they are joined on read from
    ``associations`` the same way the SQL repositories join the junction
    table.
    """

    posts: dict[PostId, Post] = field(default_factory=dict)
    categories: dict[CategoryId, Category] = field(default_factory=dict)
    # (post_id, category_id) pairs in insertion order
    associations: list[tuple[PostId, CategoryId]] = field(default_factory=list)
    _post_ids: Iterator[int] = field(default_factory=lambda: count(1))
    _category_ids: Iterator[int] = field(default_factory=lambda: count(1))

    def next_post_id(self) -> PostId:
        return PostId(next(self._post_ids))

    def next_category_id(self) -> CategoryId:
        return CategoryId(next(self._category_ids))
