"""Rule settings and the YAML settings file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any

import yaml

from movefinder.constants import (
    BINGO_BONUS,
    LETTER_SCORINGS,
    RACK_CAPACITY,
    SCRABBLE_VALUES,
    WILDCARD,
)
from movefinder.errors import ConfigError

log = logging.getLogger("movefinder")

POSITION_FORMATS = ("letter_digit", "digit_letter")


@dataclass(frozen=True)
class Rules:
    """Values the engine and score calculator read; never mutated during a search."""

    wildcards_have_multi_meaning: bool = False
    rack_capacity: int = RACK_CAPACITY
    letter_values: dict[str, int] = field(default_factory=lambda: dict(SCRABBLE_VALUES))
    bingo_bonus: int = BINGO_BONUS
    top_n: int | None = None
    wildcard: str = WILDCARD

    def letter_value(self, letter: str) -> int:
        return self.letter_values.get(letter.upper(), 0)


@dataclass
class Settings:
    """Everything a ``solve`` run needs, as read from a settings file and flags."""

    dictionary: str | None = None
    board: str | None = None  # board text, not a path
    tray: str | None = None
    n_shown: int | None = None
    letter_score: dict[str, int] | None = None
    letter_scoring: str = "scrabble"
    wildcards_have_multi_meaning: bool = False
    extra_bonus: int = BINGO_BONUS
    rack_capacity: int = RACK_CAPACITY
    position_format: str = "letter_digit"
    show_each_score: bool = False
    workers: int = 1
    wildcard: str = WILDCARD  # rack marker for a blank

    def rules(self) -> Rules:
        if self.letter_score is not None:
            values = {k.upper(): v for k, v in self.letter_score.items()}
        else:
            try:
                values = dict(LETTER_SCORINGS[self.letter_scoring])
            except KeyError:
                raise ConfigError(
                    f"unknown letter_scoring {self.letter_scoring!r}, "
                    f"expected one of {sorted(LETTER_SCORINGS)}"
                ) from None
        return Rules(
            wildcards_have_multi_meaning=self.wildcards_have_multi_meaning,
            rack_capacity=self.rack_capacity,
            letter_values=values,
            bingo_bonus=self.extra_bonus,
            top_n=self.n_shown,
            wildcard=self.wildcard,
        )


_TYPES: dict[str, tuple[type, ...]] = {
    "dictionary": (str,),
    "board": (str, dict),
    "tray": (str, dict),
    "n_shown": (int,),
    "letter_score": (dict,),
    "letter_scoring": (str,),
    "wildcards_have_multi_meaning": (bool,),
    "extra_bonus": (int,),
    "rack_capacity": (int,),
    "position_format": (str,),
    "show_each_score": (bool,),
    "workers": (int,),
    "wildcard": (str,),
}


def _read_text_value(key: str, value: str | dict) -> str:
    """A board or tray is either inline text or ``{file: path}``."""
    if isinstance(value, str):
        return value
    if set(value) != {"file"}:
        raise ConfigError(f"{key} must be a string or a mapping with a single 'file' key")
    try:
        with open(value["file"], "r", encoding="utf-8") as f:
            return f.read()
    except OSError as exc:
        raise ConfigError(f"cannot read {key} file {value['file']}: {exc}") from exc


def settings_from_mapping(data: dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown settings: {', '.join(unknown)}")
    values: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        expected = _TYPES[key]
        # bool is an int subclass; keep the two apart
        if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
            raise ConfigError(f"setting {key!r} has the wrong type ({type(value).__name__})")
        if key in ("board", "tray"):
            value = _read_text_value(key, value)
        values[key] = value
    if values.get("position_format", "letter_digit") not in POSITION_FORMATS:
        raise ConfigError(f"position_format must be one of {POSITION_FORMATS}")
    wildcard = values.get("wildcard", WILDCARD)
    if len(wildcard) != 1 or wildcard.isalpha() or wildcard.isspace():
        raise ConfigError(f"wildcard must be a single non-letter character, got {wildcard!r}")
    if "letter_score" in values:
        scores = values["letter_score"]
        if not all(isinstance(k, str) and isinstance(v, int) for k, v in scores.items()):
            raise ConfigError("letter_score must map letters to integers")
    return Settings(**values)


def load_settings(path: str) -> Settings:
    """Read a YAML settings file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"settings file {path} must hold a mapping")
    log.debug("Loaded settings from %s: %s", path, sorted(data))
    return settings_from_mapping(data)
