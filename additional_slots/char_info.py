__all__ = [

    "ELEMENT",
    "EFLAME_FIRST",
    "ELIGHT_FIRST",
    "EFLAME_ONLY",
    "ELIGHT_ONLY",
    "CHARACTER_ALIASES",
    "resolve_aliases",
]

# Pyra/Mythra ship one fighter directory, "element", but the character select screen
# has a ui_chara_db record for each way the pair can be picked.
ELEMENT = "element"
EFLAME_FIRST = "eflame_first"
ELIGHT_FIRST = "elight_first"
EFLAME_ONLY = "eflame_only"
ELIGHT_ONLY = "elight_only"

# Fighter directory name -> ui_chara_db record names that use the same costume set.
CHARACTER_ALIASES = {

    ELEMENT: (EFLAME_FIRST, ELIGHT_FIRST, EFLAME_ONLY, ELIGHT_ONLY),
}


def resolve_aliases(max_slots, aliases=None):
    """
    Copy the slot count of each fighter directory to the records that share its costumes.
    Aliases are overwritten even if the scan already produced a value for them.
    `max_slots` is modified in place and also returned for convenience.
    """
    if aliases is None:
        aliases = CHARACTER_ALIASES

    for character, alias_names in aliases.items():
        if character not in max_slots:
            continue

        slot_count = max_slots[character]

        for alias in alias_names:
            max_slots[alias] = slot_count

    return max_slots
