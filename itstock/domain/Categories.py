"""Category Set: unique string labels offered when creating items."""
from typing import Iterable, List, Optional

from itstock.domain.errors import ValidationError
from itstock.utilities.constants import DEFAULT_CATEGORIES


class CategorySet:
    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names: List[str] = []
        for name in (DEFAULT_CATEGORIES if names is None else names):
            if name not in self._names:
                self._names.append(name)

    def add(self, name: str) -> bool:
        '''Adds a category; returns False when it is already present.'''
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Category name cannot be empty")
        name = name.strip()
        if name in self._names:
            return False
        self._names.append(name)
        return True

    def remove(self, name: str) -> bool:
        '''Removes a category. Items still referencing it keep the string.'''
        if name in self._names:
            self._names.remove(name)
            return True
        return False

    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __str__(self) -> str:
        return "Categories: " + ", ".join(self._names)

    __repr__ = __str__
