from __future__ import annotations

import random
from collections import deque
from typing import Deque, Iterable, List, Optional, Sequence

from .board import GEM_TYPES, Category


class SpawnQueue:
    """FIFO of scripted tile categories, consulted before falling back to random draws."""

    def __init__(self, categories: Sequence[Category] = GEM_TYPES, rng: Optional[random.Random] = None) -> None:
        self.categories = tuple(categories)
        self.random = rng or random.Random()
        self._pending: Deque[Category] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def _check(self, category: Category) -> Category:
        if category not in self.categories:
            raise ValueError(f'unknown category {category!r}; expected one of {self.categories}')
        return category

    def enqueue(self, category: Category) -> None:
        self._pending.append(self._check(category))

    def enqueue_many(self, categories: Iterable[Category]) -> None:
        # Check everything first so a bad entry leaves the queue unchanged.
        checked = [self._check(c) for c in categories]
        self._pending.extend(checked)

    def dequeue_or_random(self) -> Category:
        if self._pending:
            return self._pending.popleft()
        return self.random.choice(self.categories)

    def peek(self, n: Optional[int] = None) -> List[Category]:
        """Returns up to `n` upcoming queued categories (all of them when n is None)."""
        items = list(self._pending)
        return items if n is None else items[:max(n, 0)]

    def clear(self) -> None:
        self._pending.clear()
