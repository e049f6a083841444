from __future__ import annotations

from collections.abc import Iterable
from itertools import takewhile

from stellaris_mod_order.models.mod import GameData, Mod


def name_prefix(name: str) -> str:
    """Return the leading run of non-alphanumeric characters in ``name``.

    Letters and digits of any script count as alphanumeric, so
    ``"[UI] Tweaks"`` gives ``"["`` and ``"Ästhetik"`` gives ``""``.
    Symbols count as non-alphanumeric even when they depict a letter,
    so a circled ``"Ⓐ"`` is part of the prefix.
    A name with no alphanumeric characters at all is its own prefix.
    """
    return "".join(takewhile(lambda c: not c.isalnum(), name))


def name_sort_key(name: str) -> tuple[str, str]:
    """Sort key equivalent to :func:`compare_names`.

    Tuples compare element-wise, so names are grouped by prefix first and
    ordered by the full name within a group. Both use code point order.
    """
    return name_prefix(name), name


def compare_names(a: str, b: str) -> int:
    """Three-way comparison of two display names: -1, 0 or 1."""
    key_a, key_b = name_sort_key(a), name_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_mods(mods: Iterable[Mod]) -> list[Mod]:
    """Sort mods by display name.

    Registry order is not meaningful, so equal display names are ordered
    by ``id`` to keep the output reproducible.
    """
    return sorted(mods, key=lambda m: (name_sort_key(m.display_name), m.id))


def build_load_order(mods: Iterable[Mod]) -> list[str]:
    return [m.id for m in sort_mods(mods)]


def build_game_data(mods: Iterable[Mod]) -> GameData:
    return GameData(mods_order=build_load_order(mods), is_eula_accepted=True)
