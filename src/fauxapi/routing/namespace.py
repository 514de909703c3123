"""Namespace resolution.

A namespace mounts every route under a common prefix. Inbound paths must
sit under the prefix on a segment boundary: with ``/api`` configured,
``/api/users`` resolves to ``/users`` while ``/apiusers`` does not resolve.
"""


def anchor(path: str) -> str:
    """Ensure *path* starts with exactly one ``/``."""
    return "/" + path.lstrip("/")


def strip_namespace(namespace: str, path: str) -> str | None:
    """Strip a normalized *namespace* from *path*.

    Returns the remaining path (always starting with ``/``), or ``None``
    when *path* is outside the namespace.
    """
    path = anchor(path)
    if not namespace:
        return path
    if path == namespace:
        return "/"
    if path.startswith(namespace + "/"):
        return anchor(path[len(namespace) :])
    return None
