# variables/binder.py

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Literal

from .synonyms import SynonymTable, constant_case, normalize_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Variable:
    """Snapshot of one template variable.

    ``value == ""`` means unset. Occurrence counts come from the usage index
    and are zero until one has been computed.
    """

    name: str
    value: str
    occurrences: int = 0
    flagged_occurrences: int = 0

    @property
    def is_filled(self) -> bool:
        return bool(self.value.strip())


@dataclass(frozen=True)
class Completion:
    completed: int
    total: int

    @property
    def percentage(self) -> int:
        if self.total == 0:
            return 0
        return round(100 * self.completed / self.total)


@dataclass(frozen=True)
class BinderChange:
    kind: Literal["seed", "set", "clear"]
    names: tuple[str, ...]


BinderListener = Callable[[BinderChange], None]


class VariableBinder:
    """Owns the name -> value mapping for one document session.

    Names are never removed; ``clear_all`` only blanks values. Every mutation
    notifies subscribers so dependent state (preview, usage index) can be
    recomputed.
    """

    def __init__(self, synonyms: SynonymTable | None = None) -> None:
        self._values: dict[str, str] = {}
        self._synonyms = synonyms if synonyms is not None else SynonymTable()
        self._listeners: list[BinderListener] = []

    @property
    def synonyms(self) -> SynonymTable:
        return self._synonyms

    def subscribe(self, listener: BinderListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def seed(
        self,
        names: Iterable[str],
        defaults: Mapping[str, str] | None = None,
    ) -> list[str]:
        """Create missing variables; existing values are never overwritten.

        Names present only in ``defaults`` are seeded too, which is how
        externally suggested entities join the set.
        """
        defaults = defaults or {}
        created: list[str] = []
        for name in [*names, *defaults]:
            if name in self._values:
                continue
            self._values[name] = defaults.get(name, "") or ""
            created.append(name)

        if created:
            logger.debug("Seeded %d variables: %s", len(created), created)
            self._notify(BinderChange("seed", tuple(created)))
        return created

    def set(self, name: str, value: str) -> None:
        self._values[name] = value
        logger.debug("Variable changed: %s", name)
        self._notify(BinderChange("set", (name,)))

    def clear_all(self) -> None:
        for name in self._values:
            self._values[name] = ""
        logger.info("Cleared %d variables", len(self._values))
        self._notify(BinderChange("clear", tuple(self._values)))

    def get(self, name: str) -> str:
        return self._values.get(name, "")

    def names(self) -> list[str]:
        return list(self._values)

    def snapshot(self) -> dict[str, str]:
        # a copy, so in-flight renders never see later edits
        return dict(self._values)

    def resolve(self, token_name: str) -> str:
        return resolve_value(token_name, self._values, self._synonyms)

    def completion(self) -> Completion:
        completed = sum(1 for v in self._values.values() if v.strip())
        return Completion(completed=completed, total=len(self._values))

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def _notify(self, change: BinderChange) -> None:
        for listener in list(self._listeners):
            listener(change)


def resolve_value(
    token_name: str,
    values: Mapping[str, str],
    synonyms: SynonymTable | None = None,
) -> str:
    """Look up a token's value, tolerant of naming variation.

    Order: exact key, then case-insensitive, separator-normalized and
    CONSTANT_CASE forms, then the same forms for every synonym. Only keys
    holding a non-blank value take part. Returns "" when nothing matches.
    """
    if not isinstance(token_name, str):
        return ""

    filled = {k: v for k, v in values.items() if isinstance(v, str) and v.strip()}
    if token_name in filled:
        return filled[token_name]

    key = _find_key(token_name, filled)
    if key is None and synonyms is not None:
        for alias in synonyms.aliases_for(token_name):
            key = _find_key(alias, filled)
            if key is not None:
                break

    return filled[key] if key is not None else ""


def _find_key(candidate: str, filled: Mapping[str, str]) -> str | None:
    lowered = candidate.lower()
    for key in filled:
        if key.lower() == lowered:
            return key

    normalized = normalize_name(candidate)
    if normalized:
        for key in filled:
            if normalize_name(key) == normalized:
                return key

    upper = constant_case(candidate)
    for key in filled:
        if key.upper() == upper:
            return key
    return None
