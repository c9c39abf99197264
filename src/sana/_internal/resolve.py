"""Name resolution — turns stored handler names into Python objects.

String handlers such as ``"blog.views:Post"`` or the namespace-style
``"blog\\views\\Post"`` are resolved lazily through a hook so the router
never hard-codes an import strategy. ``import_string`` is the default
hook; pass another callable as ``RouterConfig.resolver`` to replace it.
"""

import importlib
from typing import Any

# Separators accepted in stored names besides Python's own "."
_NAMESPACE_SEPARATORS = ("\\", "/")


def normalize_name(name: str) -> str:
    """Translate namespace separators into Python's dotted form.

    Examples::

        "blog\\views\\Post"  -> "blog.views.Post"
        "blog/views:Post"    -> "blog.views:Post"
    """
    for separator in _NAMESPACE_SEPARATORS:
        name = name.replace(separator, ".")
    return name.strip(".")


def import_string(name: str) -> Any:
    """Resolve a dotted import string to the object it names.

    Accepts ``"module:attribute"`` and ``"module.attribute"`` formats.
    The attribute part may itself be dotted (``"module:Outer.Inner"``).

    Args:
        name: Import string, optionally using ``\\`` or ``/`` as
            package separators.

    Returns:
        The resolved object.

    Raises:
        ImportError: If no module prefix of *name* can be imported, or
            the attribute does not exist on the module.

    """
    name = normalize_name(name)
    if not name:
        msg = "Cannot resolve an empty name"
        raise ImportError(msg)

    if ":" in name:
        module_path, _, attr_path = name.partition(":")
        module = importlib.import_module(module_path)
        return _walk(module, attr_path, name)

    # No explicit split, so take the longest importable module prefix
    parts = name.split(".")
    for index in range(len(parts) - 1, 0, -1):
        module_path = ".".join(parts[:index])
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as exc:
            # Only skip when the prefix itself is missing, not one of its imports
            missing = exc.name or ""
            if module_path == missing or module_path.startswith(missing + "."):
                continue
            raise
        return _walk(module, ".".join(parts[index:]), name)

    msg = f"Cannot resolve {name!r}: no importable module prefix"
    raise ImportError(msg)


def _walk(obj: Any, attr_path: str, name: str) -> Any:
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            msg = f"Cannot resolve {name!r}: {exc}"
            raise ImportError(msg) from exc
    return obj
