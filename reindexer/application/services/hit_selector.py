"""Select the hits of a search result that qualify for transformation."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from reindexer.application.dtos.search import Hit, SearchResult

HitPredicate = Callable[[Hit], bool]


def identifier_equals(target_id: str) -> HitPredicate:
    """Predicate matching hits whose identifier is exactly ``target_id``."""

    def _matches(hit: Hit) -> bool:
        return hit.id == target_id

    return _matches


class HitSelector:
    """Lazy, restartable view of the qualifying hits of one SearchResult.

    Each iteration walks the result again in store order; non-qualifying
    hits are skipped without side effects.
    """

    def __init__(self, result: SearchResult, predicate: HitPredicate) -> None:
        self._result = result
        self._predicate = predicate

    @classmethod
    def for_identifier(cls, result: SearchResult, target_id: str) -> "HitSelector":
        return cls(result, identifier_equals(target_id))

    def __iter__(self) -> Iterator[Hit]:
        return (hit for hit in self._result.hits if self._predicate(hit))
