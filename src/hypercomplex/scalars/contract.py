"""Scalar contract shared by every base type a hypercomplex number is built on.

A ScalarField is a strategy object: it knows how to create, combine, render
and release the scalars it owns. The number type is written once against
this interface.

Two lifecycle models hide behind the same contract:
- value scalars are immutable and need no cleanup, so every lifecycle hook
  is a no-op;
- resource-owning scalars are handles to storage that must be released, so
  every operation returns freshly allocated storage owned by the active
  OwnershipScope.

Algorithms open a scope around their work and ``keep`` the result:

    with field.scope() as scope:
        tmp = field.mul(a, b)
        out = field.add(tmp, c)
        return scope.keep(out)

``tmp`` is released when the block exits, on success and on error alike;
``out`` is handed to the enclosing scope, or to the caller at top level.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from hypercomplex.data.precision_types import PrecisionFormat, get_tolerance

S = TypeVar("S")


class Releasable(Protocol):
    """Anything that owns storage and can give it back."""

    def release(self) -> None: ...


R = TypeVar("R", bound=Releasable)


class OwnershipScope:
    """Owns every resource allocated while it is the active scope.

    Resources are keyed by identity so that numbers with value equality are
    still tracked separately.
    """

    __slots__ = ("_owned", "parent")

    def __init__(self, parent: OwnershipScope | None = None) -> None:
        self._owned: dict[int, Releasable] = {}
        self.parent = parent

    def __len__(self) -> int:
        return len(self._owned)

    def track(self, resource: R) -> R:
        """Take ownership of ``resource``."""
        self._owned[id(resource)] = resource
        return resource

    def disown(self, resource: Releasable) -> bool:
        """Give up ownership without releasing. Returns False if not owned."""
        return self._owned.pop(id(resource), None) is not None

    def disown_all(self, resources: list[Any]) -> None:
        """Give up ownership of several resources at once."""
        for resource in resources:
            self.disown(resource)

    def keep(self, resource: R) -> R:
        """Hand ``resource`` to the enclosing scope, or to the caller at top level."""
        self.disown(resource)
        if self.parent is not None:
            self.parent.track(resource)
        return resource

    def close(self) -> None:
        """Release everything still owned, newest first."""
        owned = list(self._owned.values())
        self._owned.clear()
        for resource in reversed(owned):
            resource.release()


class _NullScope(OwnershipScope):
    """Scope for value scalars: nothing to own, nothing to release."""

    __slots__ = ()

    def track(self, resource: R) -> R:
        return resource

    def disown(self, resource: Releasable) -> bool:
        return False

    def keep(self, resource: R) -> R:
        return resource

    def close(self) -> None:
        pass


NULL_SCOPE = _NullScope()


class ScalarField(ABC, Generic[S]):
    """Capability set {+, −, ×, ÷, unary −, ==, √, sin, cos, exp, 0}.

    Subclasses that hand out mutable storage set ``mutable = True`` and
    override the lifecycle hooks (``scope``, ``track``, ``untrack``,
    ``release``).
    """

    mutable: ClassVar[bool] = False
    """True when scalars are storage handles overwritten in place."""

    format: PrecisionFormat

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def coerce(self, value: Any) -> S:
        """Create a new scalar holding ``value`` (copy-in from a raw value)."""

    def copy(self, x: S) -> S:
        """Create an independent scalar with the same value."""
        return self.coerce(x)

    @abstractmethod
    def set(self, target: S, value: Any) -> S:
        """Overwrite ``target`` with ``value`` and return what to store.

        Mutable fields write into ``target`` and return it; value fields
        return the new value for the caller to rebind.
        """

    def release(self, x: S) -> None:
        """Give the storage behind ``x`` back."""

    def scope(self) -> AbstractContextManager[OwnershipScope]:
        """Open an ownership scope for temporaries."""
        return nullcontext(NULL_SCOPE)

    def track(self, resource: R) -> R:
        """Register ``resource`` with the active scope, if any."""
        return resource

    def untrack(self, resource: Releasable) -> None:
        """Remove ``resource`` from whichever active scope owns it."""

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    @abstractmethod
    def zero(self) -> S:
        """Additive identity."""

    @abstractmethod
    def add(self, a: S, b: S) -> S: ...

    @abstractmethod
    def sub(self, a: S, b: S) -> S: ...

    @abstractmethod
    def mul(self, a: S, b: S) -> S: ...

    @abstractmethod
    def div(self, a: S, b: S) -> S: ...

    @abstractmethod
    def neg(self, a: S) -> S: ...

    @abstractmethod
    def eq(self, a: S, b: S) -> bool: ...

    @abstractmethod
    def sqrt(self, a: S) -> S: ...

    @abstractmethod
    def sin(self, a: S) -> S: ...

    @abstractmethod
    def cos(self, a: S) -> S: ...

    @abstractmethod
    def exp(self, a: S) -> S: ...

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    @abstractmethod
    def render(self, a: S) -> str:
        """Text form of a single scalar."""

    @abstractmethod
    def to_float(self, a: S) -> float: ...

    def tolerance(self, kind: str = "equality_tol") -> float:
        """Comparison tolerance for this field's format."""
        return get_tolerance(self.format, kind)


__all__ = [
    "NULL_SCOPE",
    "OwnershipScope",
    "Releasable",
    "ScalarField",
]
