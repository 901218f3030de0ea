"""Reading word lists and compiled dictionaries from disk."""

from __future__ import annotations

import logging
import os
import time

from movefinder.constants import MIN_WORD_LENGTH
from movefinder.dawg import DictionaryIndex
from movefinder.errors import DictionaryLoadError

log = logging.getLogger("movefinder.dictionary")

ARTIFACT_SUFFIXES = (".dawg",)

def read_words(path: str) -> list[str]:
    """Words of a one-word-per-line list, upper-cased, A-Z only, length >= 2."""
    t0 = time.perf_counter()
    words: list[str] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                word = line.strip().upper()
                if len(word) >= MIN_WORD_LENGTH and word.isascii() and word.isalpha():
                    words.append(word)
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"cannot read word list {path}: {exc}") from exc
    log.info("Read %s words from %s in %.2fs", f"{len(words):,}", path, time.perf_counter() - t0)
    return words


def load_word_list(path: str) -> DictionaryIndex:
    """Build a dictionary index from a plain word list."""
    words = read_words(path)
    t0 = time.perf_counter()
    index = DictionaryIndex.from_words(words)
    log.info(
        "Dictionary built in %.2fs (%s words, %s records)",
        time.perf_counter() - t0, f"{len(index):,}", f"{index.record_count:,}",
    )
    return index


def load_artifact(path: str) -> DictionaryIndex:
    """Load a dictionary compiled with :func:`compile_dictionary`."""
    t0 = time.perf_counter()
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise DictionaryLoadError(f"cannot read compiled dictionary {path}: {exc}") from exc
    index = DictionaryIndex.from_bytes(data)
    log.info("Loaded %s words from %s in %.2fs", f"{len(index):,}", path, time.perf_counter() - t0)
    return index


def load_dictionary(path: str) -> DictionaryIndex:
    """Load either a compiled artifact or a word list, chosen by file suffix."""
    if not os.path.exists(path):
        raise DictionaryLoadError(f"dictionary file not found: {path}")
    if path.lower().endswith(ARTIFACT_SUFFIXES):
        return load_artifact(path)
    return load_word_list(path)


def compile_dictionary(list_path: str, artifact_path: str) -> DictionaryIndex:
    """Compile a word list into an artifact file for faster loading."""
    index = load_word_list(list_path)
    t0 = time.perf_counter()
    with open(artifact_path, "wb") as f:
        f.write(index.to_bytes())
    log.info("Dictionary written to %s in %.2fs", artifact_path, time.perf_counter() - t0)
    return index
