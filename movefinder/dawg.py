"""Minimised word automaton (DAWG) for word and prefix lookups.

The index is built from a word list or decoded from a compiled artifact.
Both paths go through the same flat record table, so membership answers
are identical whichever way the index was obtained.

Record layout (one little-endian uint32 per outgoing edge)::

    bit 31      more records follow for this node
    bits 24-30  edge letter; ``$`` marks the node as the end of a word
    bits 0-23   record index of the child node

A node is a run of consecutive records; its state id is the index of its
first record, and the root is state 0.
"""

from __future__ import annotations

import zlib
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

import numpy as np

from movefinder.errors import DictionaryLoadError

MAGIC = b"MFDAWG1\n"
END = "$"
_NUL = "\x00"  # letter of the lone record of an empty automaton
_MORE = 0x80000000
_LINK_MASK = 0xFFFFFF

_EMPTY: Mapping[str, int] = MappingProxyType({})


class _BuildNode:
    """Mutable node used only while building the automaton."""

    __slots__ = ("children", "is_terminal")

    def __init__(self):
        self.children: dict[str, _BuildNode] = {}
        self.is_terminal: bool = False

    def signature(self) -> tuple:
        # children are already registered, so identity is equivalence
        return (
            self.is_terminal,
            tuple((ch, id(child)) for ch, child in sorted(self.children.items())),
        )


def normalize_words(words: Iterable[str]) -> list[str]:
    """Upper-case, drop blanks and non A-Z entries, sort and deduplicate."""
    cleaned = set()
    for w in words:
        word = str(w).strip().upper()
        if word and word.isascii() and word.isalpha():
            cleaned.add(word)
    return sorted(cleaned)


def _build(words: list[str]) -> _BuildNode:
    """Incremental construction of a minimal automaton from sorted words."""
    root = _BuildNode()
    register: dict[tuple, _BuildNode] = {}
    unchecked: list[tuple[_BuildNode, str, _BuildNode]] = []

    def minimize(down_to: int) -> None:
        while len(unchecked) > down_to:
            parent, ch, child = unchecked.pop()
            key = child.signature()
            existing = register.get(key)
            if existing is not None:
                parent.children[ch] = existing
            else:
                register[key] = child

    previous = ""
    for word in words:
        common = 0
        for a, b in zip(word, previous):
            if a != b:
                break
            common += 1
        minimize(common)
        node = unchecked[-1][2] if unchecked else root
        for ch in word[common:]:
            child = _BuildNode()
            node.children[ch] = child
            unchecked.append((node, ch, child))
            node = child
        node.is_terminal = True
        previous = word
    minimize(0)
    return root


def _encode(root: _BuildNode) -> np.ndarray:
    """Lay the automaton out as a flat record table (breadth first)."""
    order: list[_BuildNode] = []
    offsets: dict[int, int] = {}
    queue = [root]
    total = 0
    while queue:
        nxt: list[_BuildNode] = []
        for node in queue:
            if id(node) in offsets:
                continue
            offsets[id(node)] = total
            order.append(node)
            total += max(1, len(node.children) + node.is_terminal)
            nxt.extend(child for _, child in sorted(node.children.items()))
        queue = nxt

    if total > _LINK_MASK:
        raise DictionaryLoadError(
            f"dictionary needs {total:,} records, more than the artifact format allows"
        )

    records: list[int] = []
    for node in order:
        edges = [(END, 0)] if node.is_terminal else []
        edges.extend((ch, offsets[id(child)]) for ch, child in sorted(node.children.items()))
        if not edges:
            edges = [(_NUL, 0)]
        for i, (ch, link) in enumerate(edges):
            more = _MORE if i + 1 < len(edges) else 0
            records.append(more | (ord(ch) << 24) | link)
    return np.array(records, dtype="<u4")


class DictionaryIndex:
    """Immutable word automaton supporting incremental prefix queries.

    States are plain integers, so a single index can be shared by any number
    of concurrent searches without locking.
    """

    __slots__ = ("_records", "_edges", "_terminal", "_word_count")

    def __init__(self, records: np.ndarray):
        self._records = records
        self._edges: dict[int, Mapping[str, int]] = {}
        self._terminal: frozenset[int] = frozenset()
        self._decode()
        self._word_count = self._count_words()

    # construction

    @classmethod
    def from_words(cls, words: Iterable[str]) -> DictionaryIndex:
        """Build from any word iterable; input is normalised, never rejected."""
        return cls(_encode(_build(normalize_words(words))))

    @classmethod
    def from_bytes(cls, data: bytes) -> DictionaryIndex:
        """Decode a compiled artifact produced by :meth:`to_bytes`."""
        if not data.startswith(MAGIC):
            raise DictionaryLoadError("not a compiled dictionary (bad header)")
        try:
            raw = zlib.decompress(data[len(MAGIC):])
        except zlib.error as exc:
            raise DictionaryLoadError(f"corrupt dictionary payload: {exc}") from exc
        if not raw or len(raw) % 4:
            raise DictionaryLoadError("truncated dictionary record table")
        return cls(np.frombuffer(raw, dtype="<u4"))

    def to_bytes(self) -> bytes:
        return MAGIC + zlib.compress(self._records.astype("<u4").tobytes(), 9)

    def _decode(self) -> None:
        records = self._records
        more = ((records >> 31) & 1).tolist()
        letters = ((records >> 24) & 0x7F).tolist()
        links = (records & _LINK_MASK).tolist()

        starts: list[int] = []
        start = 0
        for i, m in enumerate(more):
            if i == start:
                starts.append(i)
            if not m:
                start = i + 1
        if not starts or more[-1]:
            raise DictionaryLoadError("truncated dictionary record table")
        valid = set(starts)

        edges: dict[int, Mapping[str, int]] = {}
        terminal: set[int] = set()
        bounds = starts[1:] + [len(more)]
        for node, end in zip(starts, bounds):
            children: dict[str, int] = {}
            for i in range(node, end):
                ch = chr(letters[i])
                if ch == END:
                    terminal.add(node)
                elif ch == _NUL:
                    continue
                elif "A" <= ch <= "Z":
                    if links[i] not in valid:
                        raise DictionaryLoadError(
                            f"record {i} points outside the dictionary ({links[i]})"
                        )
                    children[ch] = links[i]
                else:
                    raise DictionaryLoadError(f"record {i} holds unexpected letter {ch!r}")
            edges[node] = MappingProxyType(children) if children else _EMPTY
        self._edges = edges
        self._terminal = frozenset(terminal)

    def _count_words(self) -> int:
        counts: dict[int, int] = {}
        open_nodes: set[int] = set()
        stack: list[tuple[int, bool]] = [(0, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded:
                open_nodes.discard(node)
                counts[node] = (node in self._terminal) + sum(
                    counts[c] for c in self._edges[node].values()
                )
                continue
            if node in counts:
                continue
            if node in open_nodes:
                raise DictionaryLoadError("dictionary automaton contains a cycle")
            open_nodes.add(node)
            stack.append((node, True))
            stack.extend((c, False) for c in self._edges[node].values() if c not in counts)
        return counts[0]

    # automaton contract

    def start_state(self) -> int:
        return 0

    def step(self, state: int, letter: str) -> int | None:
        """Advance by one letter, or None if no word continues that way."""
        return self._edges[state].get(letter)

    def is_terminal(self, state: int) -> bool:
        return state in self._terminal

    def children(self, state: int) -> Mapping[str, int]:
        """Read-only map of every letter accepted from *state*."""
        return self._edges[state]

    # word queries

    def has_word(self, word: str) -> bool:
        state = self._walk(word.upper())
        return state is not None and state in self._terminal

    def has_prefix(self, prefix: str) -> bool:
        return self._walk(prefix.upper()) is not None

    def first_match(self, pattern: Sequence[str | None]) -> str | None:
        """First word (alphabetically) matching *pattern*.

        Each pattern item is a letter, or None for "any letter".
        """
        n = len(pattern)
        stack: list[tuple[int, int, str]] = [(0, 0, "")]
        while stack:
            state, i, spelled = stack.pop()
            if i == n:
                if state in self._terminal:
                    return spelled
                continue
            want = pattern[i]
            if want is None:
                for ch, child in sorted(self._edges[state].items(), reverse=True):
                    stack.append((child, i + 1, spelled + ch))
            else:
                child = self._edges[state].get(want)
                if child is not None:
                    stack.append((child, i + 1, spelled + want))
        return None

    def has_match(self, pattern: Sequence[str | None]) -> bool:
        return self.first_match(pattern) is not None

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.has_word(word)

    def __len__(self) -> int:
        return self._word_count

    def __iter__(self) -> Iterator[str]:
        """All words in alphabetical order."""
        stack: list[tuple[int, str]] = [(0, "")]
        while stack:
            state, spelled = stack.pop()
            if state in self._terminal and spelled:
                yield spelled
            for ch, child in sorted(self._edges[state].items(), reverse=True):
                stack.append((child, spelled + ch))

    @property
    def record_count(self) -> int:
        return int(self._records.shape[0])

    def _walk(self, s: str) -> int | None:
        state = 0
        for ch in s:
            state = self._edges[state].get(ch)
            if state is None:
                return None
        return state
