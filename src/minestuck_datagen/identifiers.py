from __future__ import annotations

DEFAULT_NAMESPACE = "minestuck"

NAMESPACE_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789_-.")
PATH_CHARS = NAMESPACE_CHARS | {"/"}


def validate_resource_location(location: str) -> bool:
    """Return True if ``location`` is a ``namespace:path`` resource location.

    Only lower-case input is accepted; callers lower-case user input first.
    """
    namespace, sep, path = location.partition(":")
    if not sep or not namespace or not path:
        return False
    return all(c in NAMESPACE_CHARS for c in namespace) and all(c in PATH_CHARS for c in path)


def grist_resource(name: str) -> str:
    if ":" in name:
        return name
    return f"{DEFAULT_NAMESPACE}:{name}"


def split_location(location: str) -> tuple[str, str]:
    namespace, _, path = location.partition(":")
    return namespace, path
