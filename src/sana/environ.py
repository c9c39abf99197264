"""Request normalisation from a WSGI/CGI environ.

Sits between a server and ``Router.dispatch``: works out the method and
a path relative to where the application is mounted.
"""

import posixpath
from collections.abc import Mapping
from typing import Any

DEFAULT_METHOD = "GET"


def strip_mount_prefix(path: str, script_name: str) -> str:
    """Remove the directory the application is installed under.

    The directory of *script_name* is compared case-insensitively against
    the start of *path*, and only whole path segments are removed::

        strip_mount_prefix("/blog/posts/7", "/blog/index.py")  -> "/posts/7"
        strip_mount_prefix("/Blog/posts/7", "/blog/index.py")  -> "/posts/7"
        strip_mount_prefix("/blogger/x", "/blog/index.py")     -> "/blogger/x"
    """
    mount = posixpath.dirname(script_name).rstrip("/")
    if not mount:
        return path
    if not path.lower().startswith(mount.lower()):
        return path
    rest = path[len(mount) :]
    if rest and rest[0] not in "/?":
        return path
    return rest


def ensure_leading_slash(path: str) -> str:
    if not path.startswith("/"):
        return "/" + path
    return path


def request_from_environ(environ: Mapping[str, Any]) -> tuple[str, str]:
    """Return ``(method, path)`` for dispatching the request in *environ*.

    ``REQUEST_URI`` (CGI, PHP-style servers) is used when present, with the
    directory of ``SCRIPT_NAME`` stripped from its start. Otherwise the
    WSGI ``PATH_INFO`` is used as is, since it is already relative to the
    mount point. A non-empty ``QUERY_STRING`` is re-attached so patterns
    ending in ``?`` can accept it. The method defaults to ``GET``.
    """
    method = str(environ.get("REQUEST_METHOD") or DEFAULT_METHOD).upper()

    uri = environ.get("REQUEST_URI")
    if uri is not None:
        path = str(uri)
        script_name = environ.get("SCRIPT_NAME")
        if script_name:
            path = strip_mount_prefix(path, str(script_name))
    else:
        path = str(environ.get("PATH_INFO") or "")
        query = environ.get("QUERY_STRING")
        if query:
            path = f"{path}?{query}"

    return method, ensure_leading_slash(path)
