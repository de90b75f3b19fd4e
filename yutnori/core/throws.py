from __future__ import annotations

from enum import IntEnum
from typing import Union


class Throw(IntEnum):
    """Outcome of one yut-stick throw, valued by the number of steps it moves."""

    BACK_DO = -1
    DO = 1
    GAE = 2
    GEOL = 3
    YUT = 4
    MO = 5

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def grants_extra_throw(self) -> bool:
        return self in (Throw.YUT, Throw.MO)

    @classmethod
    def parse(cls, raw: Union[str, int]) -> "Throw":
        """Accept a step value, a Korean label (도, 빽도...) or a romanized name."""
        if isinstance(raw, int):
            return cls(raw)
        text = raw.strip()
        for throw, label in _LABELS.items():
            if text == label:
                return throw
        if text.lower() in _ALIASES:
            return _ALIASES[text.lower()]
        key = text.upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        try:
            return cls(int(text))
        except ValueError:
            raise ValueError(f"Unknown throw: {raw!r}") from None


_LABELS = {
    Throw.BACK_DO: "빽도",
    Throw.DO: "도",
    Throw.GAE: "개",
    Throw.GEOL: "걸",
    Throw.YUT: "윷",
    Throw.MO: "모",
}

_ALIASES = {
    "뒷도": Throw.BACK_DO,
    "빽": Throw.BACK_DO,
    "backdo": Throw.BACK_DO,
    "back": Throw.BACK_DO,
}
