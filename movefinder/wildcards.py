"""How wildcard tiles already on the board are read during a search.

A policy is chosen once per run. It is stateless: every answer is a pure
function of the board cells handed in, so the same policy object is shared
by all search workers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from movefinder.dawg import DictionaryIndex


def _advance(
    dictionary: DictionaryIndex,
    states: Iterable[int],
    pattern: Sequence[str | None],
) -> set[int]:
    """All automaton states reachable from *states* by spelling *pattern*."""
    current = set(states)
    for want in pattern:
        nxt: set[int] = set()
        for state in current:
            if want is None:
                nxt.update(dictionary.children(state).values())
            else:
                child = dictionary.step(state, want)
                if child is not None:
                    nxt.add(child)
        if not nxt:
            return nxt
        current = nxt
    return current


class WildcardPolicy:
    """Base policy; subclasses decide what letter a board wildcard stands for."""

    __slots__ = ()

    multi_meaning = False

    def pattern_letter(self, cell: str) -> str | None:
        """Letter an occupied cell contributes to a word, or None for "any"."""
        raise NotImplementedError

    def cross_check(
        self,
        dictionary: DictionaryIndex,
        before: Sequence[str],
        after: Sequence[str],
    ) -> frozenset[str]:
        """Letters L such that ``before + L + after`` can spell a word.

        *before* and *after* are the raw board cells of the perpendicular run.
        """
        prefix = [self.pattern_letter(c) for c in before]
        suffix = [self.pattern_letter(c) for c in after]
        allowed: set[str] = set()
        for state in _advance(dictionary, [dictionary.start_state()], prefix):
            for letter, child in dictionary.children(state).items():
                if letter in allowed:
                    continue
                if any(dictionary.is_terminal(s) for s in _advance(dictionary, [child], suffix)):
                    allowed.add(letter)
        return frozenset(allowed)

    def through_board_tile(
        self, dictionary: DictionaryIndex, state: int, cell: str
    ) -> Iterator[tuple[str, int]]:
        """Automaton transitions for extending a word through an occupied cell."""
        letter = self.pattern_letter(cell)
        if letter is None:
            yield from sorted(dictionary.children(state).items())
            return
        child = dictionary.step(state, letter)
        if child is not None:
            yield letter, child

    def wildcard_fits(self, letter: str, cross_set: frozenset[str]) -> bool:
        """Whether a rack wildcard may be played as *letter* on a square."""
        return letter in cross_set

    def resolve_word(
        self, dictionary: DictionaryIndex, cells: Sequence[str]
    ) -> str:
        """Spell a run of cells, choosing letters for free wildcards if needed."""
        pattern = [self.pattern_letter(c) for c in cells]
        if None not in pattern:
            return "".join(pattern)  # type: ignore[arg-type]
        found = dictionary.first_match(pattern)
        if found is None:
            return "".join(c.upper() for c in cells)
        return found

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FixedWildcards(WildcardPolicy):
    """A wildcard keeps the letter it was played as, in both directions."""

    __slots__ = ()

    def pattern_letter(self, cell: str) -> str | None:
        return cell.upper()


class MultiMeaningWildcards(WildcardPolicy):
    """A wildcard may stand for a different letter in each word it belongs to.

    Board wildcards (lower-case cells) match any letter, re-derived for every
    query. A wildcard played from the rack may likewise take a letter in the
    main word that the perpendicular word would reject, provided some letter
    satisfies the perpendicular word.
    """

    __slots__ = ()

    multi_meaning = True

    def pattern_letter(self, cell: str) -> str | None:
        return None if cell.islower() else cell

    def wildcard_fits(self, letter: str, cross_set: frozenset[str]) -> bool:
        return bool(cross_set)


FIXED = FixedWildcards()
MULTI_MEANING = MultiMeaningWildcards()


def policy_for(multi_meaning: bool) -> WildcardPolicy:
    return MULTI_MEANING if multi_meaning else FIXED
