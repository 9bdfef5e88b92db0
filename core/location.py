"""
Location.py

LocationKey helpers.

A location is a view path plus a query string ("/editor?file=/notes/a.md").
The key is the canonical string form of that pair: two notifications with
equal keys are the same history entry.
"""

from pathlib import PurePosixPath
from urllib.parse import parse_qsl, urlencode
from typing import Optional, Tuple

# Query parameters that only steer the view (cursor line, input focus)
# and never make a distinct history entry.
TRANSIENT_PARAMS = ("focus", "line")

FILE_PARAM = "file"
FOLDER_PARAM = "folder"


def split_location(location: str) -> Tuple[str, str]:
    """Split a location string into (path, query) without the '?'."""
    path, _, query = location.partition("?")
    return path, query


def normalize_query(query: str) -> str:
    """Drop transient parameters and re-serialize the rest in order."""
    query = query.lstrip("?")
    if not query:
        return ""
    params = [
        (key, value)
        for key, value in parse_qsl(query, keep_blank_values=True)
        if key not in TRANSIENT_PARAMS
    ]
    return urlencode(params, safe="/")


def make_location(path: str, query: str = "") -> str:
    """Build the LocationKey for a (path, query) notification."""
    query = normalize_query(query)
    return f"{path}?{query}" if query else path


def normalize_location(location: str) -> str:
    path, query = split_location(location)
    return make_location(path, query)


def resource_path(location: str) -> Optional[str]:
    """
    Returns the file or folder a location displays.

    The decoded `file` parameter wins over `folder`. A key without a query
    is its own resource path only when it names a file ("/notes/a.md");
    plain views ("/", "/settings") and keys with neither parameter
    (search) reference no resource.
    """
    path, query = split_location(location)
    if not query:
        return path if PurePosixPath(path).suffix else None

    params = dict(parse_qsl(query, keep_blank_values=True))
    if FILE_PARAM in params:
        return params[FILE_PARAM]
    if FOLDER_PARAM in params:
        return params[FOLDER_PARAM]
    return None


def is_inside_folder(path: Optional[str], folder: str) -> bool:
    """True if `path` is `folder` itself or lies beneath it."""
    if path is None:
        return False
    folder = folder.rstrip("/")
    return path == folder or path.startswith(folder + "/")
