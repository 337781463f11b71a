"""Sub-client identifier derivation.

Identifiers are derived by lower-casing the submodule name, so two submodules
that differ only in case end up sharing one instance variable.
"""

from collections.abc import Iterable


def subclient_identifier(submodule_name: str) -> str:
    """Return the instance variable holding the sub-client for a submodule."""
    return f"@{submodule_name.lower()}_client"


def find_identifier_collisions(submodule_names: Iterable[str]) -> dict[str, list[str]]:
    """Find distinct submodule names that fold onto the same identifier.

    Repeats of the exact same submodule name are not collisions.

    Args:
        submodule_names: Submodule names in input order

    Returns:
        Mapping of identifier to the colliding names, in first-seen order.
        Empty when every identifier is unique.

    """
    groups: dict[str, list[str]] = {}
    for name in submodule_names:
        names = groups.setdefault(subclient_identifier(name), [])
        if name not in names:
            names.append(name)
    return {identifier: names for identifier, names in groups.items() if len(names) > 1}
