from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Union

CandidateGroup = tuple[str, ...]

# A catalog value is a group of selectors, a nested catalog, or a leaf that is
# not a selector group (base URLs, selector generator functions).
CatalogEntry = Union[Sequence[str], "SelectorCatalog", str, Callable[..., object]]
SelectorCatalog = Mapping[str, CatalogEntry]


class CandidateIndex:
    """Maps every cataloged selector to its ordered group of alternatives.

    Groups are ordered newest-known first. Every member of a group maps back to
    the same tuple. A selector reused across groups belongs to whichever group
    was registered last.
    """

    def __init__(self, entries: Mapping[str, CandidateGroup]) -> None:
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def build(cls, catalog: SelectorCatalog | Sequence[str]) -> CandidateIndex:
        entries: dict[str, CandidateGroup] = {}
        _register(catalog, entries)
        return cls(entries)

    def lookup(self, selector: str) -> CandidateGroup | None:
        return self._entries.get(selector)

    def groups(self) -> list[CandidateGroup]:
        seen: dict[int, CandidateGroup] = {}
        for group in self._entries.values():
            seen.setdefault(id(group), group)
        return list(seen.values())

    def __contains__(self, selector: object) -> bool:
        return selector in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


def _register(node: object, entries: dict[str, CandidateGroup]) -> None:
    if isinstance(node, str) or callable(node):
        return
    if isinstance(node, Mapping):
        for value in node.values():
            _register(value, entries)
        return
    if isinstance(node, Sequence):
        group = tuple(item for item in node if isinstance(item, str))
        if not group:
            return
        for selector in group:
            entries[selector] = group
