"""Handler variants — the four ways a route can name its code.

Every variant is invoked with the captured parameter mapping as its only
argument::

    Function(list_users)                   list_users(params)
    BoundMethod(controller, "show")        controller.show(params)
    Constructible("app.views:Post", "get") Post(params).get(params)
    Closure(lambda params: ...)            (lambda)(params)

``as_handler`` turns the loose values accepted by ``Router.register_route``
(functions, ``(obj, "method")`` pairs, import strings) into one of these.
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, TypeAlias

from sana._internal.resolve import import_string
from sana._internal.types import GeneratorParams, Resolver
from sana.errors import Uninvocable


def _resolve(resolver: Resolver, name: str) -> Any:
    try:
        return resolver(name)
    except (ImportError, AttributeError, LookupError) as exc:
        msg = f"Cannot resolve handler {name!r}: {exc}"
        raise Uninvocable(msg) from exc


def _require_callable(obj: Any, what: str) -> Callable[..., Any]:
    if not callable(obj):
        msg = f"{what} is not callable"
        raise Uninvocable(msg)
    return obj


def _name_of(obj: Any) -> str:
    if isinstance(obj, str):
        return obj
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None) or type(obj).__qualname__
    return f"{module}.{qualname}" if module else qualname


@dataclass(frozen=True, slots=True)
class Function:
    """A module-level function, or an import string naming one."""

    func: Callable[..., Any] | str
    resolver: Resolver = import_string

    def target(self) -> Callable[..., Any]:
        func = _resolve(self.resolver, self.func) if isinstance(self.func, str) else self.func
        return _require_callable(func, f"Function {self.describe()}")

    def resolved(self) -> "Function":
        if isinstance(self.func, str):
            return replace(self, func=self.target())
        self.target()
        return self

    def invoke(self, params: GeneratorParams) -> Any:
        return self.target()(params)

    def describe(self) -> str:
        return _name_of(self.func)


@dataclass(frozen=True, slots=True)
class BoundMethod:
    """A method looked up by name on an existing object."""

    instance: Any
    method_name: str

    def target(self) -> Callable[..., Any]:
        method = getattr(self.instance, self.method_name, None)
        return _require_callable(method, f"Method {self.describe()}")

    def resolved(self) -> "BoundMethod":
        self.target()
        return self

    def invoke(self, params: GeneratorParams) -> Any:
        return self.target()(params)

    def describe(self) -> str:
        return f"{type(self.instance).__qualname__}.{self.method_name}"


@dataclass(frozen=True, slots=True)
class Constructible:
    """A class built fresh per call, then asked to run one of its methods.

    The class receives the parameters as its constructor argument, and
    the method receives them again::

        Constructible("blog.views:Post", "show").invoke({"id": "7"})
        # == blog.views.Post({"id": "7"}).show({"id": "7"})
    """

    cls: type | str
    method_name: str
    resolver: Resolver = import_string

    def target_class(self) -> type:
        cls = _resolve(self.resolver, self.cls) if isinstance(self.cls, str) else self.cls
        _require_callable(cls, f"Class {self.describe()}")
        if not callable(getattr(cls, self.method_name, None)):
            msg = f"Method {self.describe()} is not callable"
            raise Uninvocable(msg)
        return cls

    def resolved(self) -> "Constructible":
        if isinstance(self.cls, str):
            return replace(self, cls=self.target_class())
        self.target_class()
        return self

    def invoke(self, params: GeneratorParams) -> Any:
        instance = self.target_class()(params)
        method = getattr(instance, self.method_name, None)
        return _require_callable(method, f"Method {self.describe()}")(params)

    def describe(self) -> str:
        return f"{_name_of(self.cls)}.{self.method_name}"


@dataclass(frozen=True, slots=True)
class Closure:
    """An inline callable: lambda, nested function, or callable object."""

    func: Callable[..., Any]

    def resolved(self) -> "Closure":
        _require_callable(self.func, f"Closure {self.describe()}")
        return self

    def invoke(self, params: GeneratorParams) -> Any:
        return self.func(params)

    def describe(self) -> str:
        return _name_of(self.func)


Handler: TypeAlias = Function | BoundMethod | Constructible | Closure

_VARIANTS = (Function, BoundMethod, Constructible, Closure)


def as_handler(
    value: Any,
    resolver: Resolver = import_string,
    *,
    resolve: bool = True,
) -> Handler:
    """Coerce a registration value into a handler variant.

    Accepted forms:

    - a variant instance (returned as is)
    - ``"module:function"`` import string -> ``Function``
    - ``("module:Class", "method")`` or ``(Class, "method")`` -> ``Constructible``
    - ``(obj, "method")`` -> ``BoundMethod``
    - a bound method -> ``BoundMethod``
    - a module-level function -> ``Function``
    - a lambda, nested function, or other callable -> ``Closure``

    With *resolve* (the default), import strings are resolved now and the
    target is checked to be callable, so mistakes surface at registration.

    Raises ``Uninvocable`` if *value* cannot become a callable handler.
    """
    handler = _coerce(value, resolver)
    return handler.resolved() if resolve else handler


def _coerce(value: Any, resolver: Resolver) -> Handler:
    if isinstance(value, _VARIANTS):
        return value

    if isinstance(value, str):
        return Function(value, resolver)

    if isinstance(value, (tuple, list)):
        if len(value) != 2 or not isinstance(value[1], str):
            msg = f"Handler pairs must be (target, 'method_name'), got {value!r}"
            raise Uninvocable(msg)
        target, method_name = value
        if isinstance(target, (str, type)):
            return Constructible(target, method_name, resolver)
        return BoundMethod(target, method_name)

    if inspect.ismethod(value):
        return BoundMethod(value.__self__, value.__name__)

    if inspect.isfunction(value):
        if value.__name__ == "<lambda>" or "<locals>" in value.__qualname__:
            return Closure(value)
        return Function(value, resolver)

    if callable(value):
        return Closure(value)

    msg = f"Handler is not callable: {value!r}"
    raise Uninvocable(msg)
