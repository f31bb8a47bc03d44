"""
``vinspect.classify``: Sorting values into kinds
================================================

:func:`classify` maps every python value to one of the kinds below. It never
fails: values we know nothing about end up as :class:`Opaque`.

The order of the checks matters. For instance :class:`bool` is a subclass of
:class:`int` and has to be checked first, and integers are checked before
floats because they are printed without a decimal point.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import enum
import functools
import inspect
import re
import types
import typing
import warnings
import weakref
from typing import Any, Callable, Type, TypeAlias, TypeVar

from . import values

__all__ = (
    "Kind",
    "Boolean",
    "HostNull",
    "Absent",
    "String",
    "Integer",
    "Float",
    "Tuple",
    "List",
    "ScalarCodepoint",
    "ByteSequence",
    "Record",
    "Map",
    "HostSet",
    "Function",
    "KeyedObject",
    "Opaque",
    "classify",
    "register",
)

T = TypeVar("T")


class Kind:
    """A classified value.

    This class should never be instantiated directly.
    """

    __slots__ = ()


@dataclasses.dataclass(frozen=True, slots=True)
class Boolean(Kind):
    value: bool


@dataclasses.dataclass(frozen=True, slots=True)
class HostNull(Kind):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class Absent(Kind):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class String(Kind):
    value: str


@dataclasses.dataclass(frozen=True, slots=True)
class Integer(Kind):
    value: int


@dataclasses.dataclass(frozen=True, slots=True)
class Float(Kind):
    value: float


@dataclasses.dataclass(frozen=True, slots=True)
class Tuple(Kind):
    items: tuple[Any, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class List(Kind):
    items: tuple[Any, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class ScalarCodepoint(Kind):
    value: int


@dataclasses.dataclass(frozen=True, slots=True)
class ByteSequence(Kind):
    data: bytes


@dataclasses.dataclass(frozen=True, slots=True)
class Record(Kind):
    tag: str
    # label is None for positional fields
    fields: tuple[tuple[str | None, Any], ...]


@dataclasses.dataclass(frozen=True, slots=True)
class Map(Kind):
    items: tuple[tuple[Any, Any], ...]


@dataclasses.dataclass(frozen=True, slots=True)
class HostSet(Kind):
    type_name: str
    items: tuple[Any, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class Function(Kind):
    arity: int


@dataclasses.dataclass(frozen=True, slots=True)
class KeyedObject(Kind):
    # None for anonymous objects
    type_name: str | None
    fields: tuple[tuple[Any, Any], ...]


@dataclasses.dataclass(frozen=True, slots=True)
class Opaque(Kind):
    text: str


Classifier: TypeAlias = Callable[[T], Kind]

DISPATCH_TABLE = weakref.WeakKeyDictionary[Type[Any], Classifier[Any]]()


def _infer_classifier_type(f: Classifier[T]) -> Type[T]:
    params = list(inspect.signature(f, eval_str=True).parameters.values())
    if len(params) != 1:
        raise ValueError(
            "The registered function should take only one argument"
        )
    [arg] = params
    ty: Type[T] | None = arg.annotation
    origin = typing.get_origin(ty)
    if origin is not None:
        ty = origin
    if ty is None or ty is inspect.Parameter.empty:
        raise ValueError(
            "Cannot infer the type to register, pass it via `type=`"
        )
    return ty


@typing.overload
def register(function: Classifier[T], /) -> Classifier[T]:  # pragma: no cover
    ...


@typing.overload
def register(
    *, type: Type[T] | None = None
) -> Callable[[Classifier[T]], Classifier[T]]:  # pragma: no cover
    ...


def register(
    function: Classifier[T] | None = None,
    /,
    *,
    type: Type[T] | None = None,
) -> Classifier[T] | Callable[[Classifier[T]], Classifier[T]]:
    """Register a function to classify values of a given type.

    *function* takes objects of type *T* and returns the :class:`Kind` they
    should be rendered as. Registered functions take precedence over all the
    built-in rules but only apply to values whose type is exactly *T*.

    If *type* is not specified, :func:`register` uses the type annotation on
    the first argument to deduce which type to register *function* for::

        >>> from fractions import Fraction
        >>> @register
        ... def _classify_fraction(f: Fraction):
        ...   return Record("Fraction", ((None, f.numerator),
        ...                              (None, f.denominator)))

    Args:

      function: The classifier we are registering

      type: The type we are registering the function for
    """

    def wrapper(function: Classifier[T]) -> Classifier[T]:
        cls = _infer_classifier_type(function) if type is None else type
        DISPATCH_TABLE[cls] = function
        return function

    if function is None:
        return wrapper
    return wrapper(function)


def _arity(fn: Callable[..., Any]) -> int:
    """Number of positional parameters before the first one with a default."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return 0
    arity = 0
    for param in sig.parameters.values():
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            break
        if param.default is not inspect.Parameter.empty:
            break
        arity += 1
    return arity


def _safe_repr(v: Any) -> str:
    try:
        return repr(v)
    except Exception as e:
        warnings.warn(
            f"repr() failed on a {type(v).__qualname__} "
            f"({type(e).__name__}: {e})",
            RuntimeWarning,
            stacklevel=2,
        )
        return object.__repr__(v)


def _keyed_fields(v: Any) -> tuple[tuple[Any, Any], ...] | None:
    if dataclasses.is_dataclass(v):
        return tuple(
            (field.name, getattr(v, field.name))
            for field in dataclasses.fields(v)
        )
    try:
        fields = vars(v)
    except TypeError:
        return None
    return tuple(fields.items())


def _classify_date(v: datetime.date) -> Opaque:
    return Opaque(f'{type(v).__name__}("{v.isoformat()}")')


@functools.singledispatch
def _classify_host(v: Any) -> Kind | None:
    "Host types that are printed with the foreign marker."
    return None


_classify_host.register(datetime.date, _classify_date)


@_classify_host.register(set)
@_classify_host.register(frozenset)
def _classify_set(v: set[Any] | frozenset[Any]) -> Kind:
    return HostSet(type(v).__name__, tuple(v))


@_classify_host.register(re.Pattern)
@_classify_host.register(types.ModuleType)
@_classify_host.register(enum.Enum)
def _classify_repr(v: Any) -> Kind:
    return Opaque(_safe_repr(v))


def classify(v: Any) -> Kind:
    """Find out how *v* should be rendered."""
    custom = DISPATCH_TABLE.get(type(v))
    if custom is not None:
        return custom(v)
    if v is True or v is False:
        return Boolean(v)
    if v is values.NULL:
        return HostNull()
    if v is None:
        return Absent()
    if isinstance(v, str):
        return String(v)
    if isinstance(v, int):
        return Integer(v)
    if isinstance(v, float):
        return Float(v)
    if isinstance(v, tuple):
        return Tuple(v)
    if isinstance(v, list):
        return List(tuple(v))
    if isinstance(v, values.UtfCodepoint):
        return ScalarCodepoint(v.value)
    if isinstance(v, bytes | bytearray | memoryview):
        return ByteSequence(bytes(v))
    if isinstance(v, values.CustomType):
        return Record(
            type(v).__name__,
            tuple(
                (None if values.is_positional(label) else label, value)
                for label, value in values.record_fields(v)
            ),
        )
    if isinstance(v, collections.abc.Mapping):
        return Map(tuple(v.items()))
    host = _classify_host(v)
    if host is not None:
        return host
    if callable(v):
        return Function(_arity(v))
    fields = _keyed_fields(v)
    if fields is not None:
        name = None if type(v) is types.SimpleNamespace else type(v).__name__
        return KeyedObject(name, fields)
    return Opaque(_safe_repr(v))
