# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Constructor descriptors and the per-type constructor index.

This stores constructor declarations with enough metadata for the resolver to
pick a concrete overload. The index itself does not perform resolution; it
only returns candidate sets (all of them, or those of one arity). The
resolver applies the distance rules to select the winner.

Two sources feed the index:
  - `TypeTable.add_constructor` for explicitly registered type graphs.
  - `reflect_constructors` for plain Python classes: the effective
    initializer plus any class-body function marked with `@constructor`.

Restricted constructors (a single leading underscore) are listed like any
other; calling one requires the privileged path (`ConstructorDescriptor.privileged`).
"""

from __future__ import annotations

import inspect
import threading
import types
import typing
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from metafactory.core.errors import ClassCreationError, IllegalAccessError
from metafactory.core.types_protocol import TypeCatalog, TypeHandle

_CONSTRUCTOR_MARK = "__metafactory_constructor__"

# Per-thread privilege grants: descriptor -> nesting depth.
_privilege = threading.local()


def _granted() -> Dict["ConstructorDescriptor", int]:
	granted = getattr(_privilege, "granted", None)
	if granted is None:
		granted = {}
		_privilege.granted = granted
	return granted


def is_restricted_name(name: str) -> bool:
	"""`_name` is restricted; dunder names (`__init__`, `__new__`) are not."""
	return name.startswith("_") and not (name.startswith("__") and name.endswith("__"))


class ConstructorDescriptor:
	"""
	One declared constructor: owner, ordered parameter types and the callable.

	`accessible` is the shared, visible flag (initially `is_public`). A
	restricted descriptor can still be called inside `privileged()`, which
	grants access to the current thread only and withdraws it on exit.
	Descriptors compare by identity.
	"""

	def __init__(
		self,
		*,
		owner: TypeHandle,
		owner_name: str,
		name: str,
		param_types: Sequence[TypeHandle],
		param_type_names: Sequence[str],
		target: Callable[..., Any],
		is_public: bool = True,
		param_names: Sequence[str] = (),
		ordinal: int = 0,
	) -> None:
		if len(param_type_names) != len(param_types):
			raise ValueError("param_type_names must align with param_types")
		self.owner = owner
		self.owner_name = owner_name
		self.name = name
		self.param_types: Tuple[TypeHandle, ...] = tuple(param_types)
		self.param_type_names: Tuple[str, ...] = tuple(param_type_names)
		self.param_names: Tuple[str, ...] = tuple(param_names) or tuple(f"arg{i}" for i in range(len(param_types)))
		self.is_public = is_public
		self.ordinal = ordinal
		self._target = target
		self._accessible = is_public

	@property
	def arity(self) -> int:
		return len(self.param_types)

	@property
	def accessible(self) -> bool:
		return self._accessible

	def set_accessible(self, flag: bool) -> None:
		self._accessible = bool(flag)

	def _callable_here(self) -> bool:
		return self._accessible or _granted().get(self, 0) > 0

	@contextmanager
	def privileged(self) -> Iterator["ConstructorDescriptor"]:
		"""
		Privileged construction: allow `new_instance` on this thread for the block.

		The shared `accessible` flag is never touched, so other threads keep
		seeing the restriction, and the grant is withdrawn on every exit path.
		"""
		granted = _granted()
		granted[self] = granted.get(self, 0) + 1
		try:
			yield self
		finally:
			depth = granted[self] - 1
			if depth:
				granted[self] = depth
			else:
				del granted[self]

	def new_instance(self, *args: Any) -> Any:
		"""Call the underlying constructor; raises IllegalAccessError when restricted."""
		if not self._callable_here():
			raise IllegalAccessError(f"constructor {self.signature()} is not accessible")
		return self._target(*args)

	def signature(self) -> str:
		return f"{self.owner_name}.{self.name}({', '.join(self.param_type_names)})"

	def __repr__(self) -> str:
		vis = "public" if self.is_public else "restricted"
		return f"<ConstructorDescriptor {self.signature()} {vis} #{self.ordinal}>"


def constructor(fn: Any) -> Any:
	"""
	Mark a class-body function as an alternate constructor.

	Works on classmethods (the class is bound, not counted as a parameter),
	staticmethods and plain functions (called with the class-free argument
	list). Apply it outside `@classmethod`/`@staticmethod`.
	"""
	func = fn.__func__ if isinstance(fn, (classmethod, staticmethod)) else fn
	setattr(func, _CONSTRUCTOR_MARK, True)
	return fn


def is_marked_constructor(obj: Any) -> bool:
	func = obj.__func__ if isinstance(obj, (classmethod, staticmethod)) else obj
	return bool(getattr(func, _CONSTRUCTOR_MARK, False))


def annotation_class(ann: Any) -> type:
	"""
	Map a resolved annotation to the class used for distance scoring.

	Missing, `Any`, unions and type variables widen to `object`; parameterized
	generics use their origin (`list[int]` -> `list`).
	"""
	if ann is None or ann is inspect.Parameter.empty or ann is Any:
		return object
	origin = typing.get_origin(ann)
	if origin is not None:
		if origin is typing.Union or origin is getattr(types, "UnionType", None):
			return object
		return origin if isinstance(origin, type) else object
	if getattr(types, "UnionType", None) is not None and isinstance(ann, types.UnionType):
		return object
	if isinstance(ann, type):
		return ann
	return object


def _positional_shapes(
	func: Any, *, skip_first: bool, qualname: str
) -> Optional[List[Tuple[Tuple[type, ...], Tuple[str, ...]]]]:
	"""
	Return one (param classes, param names) shape per admissible arity.

	None means the callable cannot be introspected; an empty list means it
	cannot be called positionally (required keyword-only parameter).
	"""
	try:
		sig = inspect.signature(func)
	except (TypeError, ValueError):
		return None
	hints: Dict[str, Any] = {}
	if inspect.isfunction(func) or inspect.ismethod(func):
		try:
			hints = typing.get_type_hints(func)
		except (NameError, TypeError) as exc:
			raise ClassCreationError(f"cannot resolve parameter annotations of constructor {qualname}: {exc}") from exc
	params = list(sig.parameters.values())
	if skip_first and params and params[0].kind in (
		inspect.Parameter.POSITIONAL_ONLY,
		inspect.Parameter.POSITIONAL_OR_KEYWORD,
	):
		params = params[1:]
	positional: List[inspect.Parameter] = []
	required = 0
	for p in params:
		if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
			positional.append(p)
			if p.default is inspect.Parameter.empty:
				required = len(positional)
		elif p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty:
			return []
	classes = tuple(annotation_class(hints.get(p.name)) for p in positional)
	names = tuple(p.name for p in positional)
	return [(classes[:n], names[:n]) for n in range(required, len(positional) + 1)]


def _effective_initializer(cls: type) -> Tuple[Optional[Any], str]:
	init = getattr(cls, "__init__", object.__init__)
	if init is not object.__init__:
		return init, "__init__"
	new = getattr(cls, "__new__", object.__new__)
	if new is not object.__new__:
		return new, "__new__"
	return None, "__init__"


def reflect_constructors(cls: type, catalog: TypeCatalog) -> List[ConstructorDescriptor]:
	"""
	Enumerate the constructors of a plain Python class.

	Discovery order (also the resolver's tie-break order): the effective
	initializer, shortest arity first, then `@constructor` members in
	class-body order.
	"""
	owner_name = catalog.name_of(cls)
	found: List[ConstructorDescriptor] = []

	def add(name: str, shapes: List[Tuple[Tuple[type, ...], Tuple[str, ...]]], target: Callable[..., Any]) -> None:
		public = not is_restricted_name(name)
		for classes, names in shapes:
			found.append(
				ConstructorDescriptor(
					owner=cls,
					owner_name=owner_name,
					name=name,
					param_types=classes,
					param_type_names=[catalog.name_of(c) for c in classes],
					target=target,
					is_public=public,
					param_names=names,
					ordinal=len(found),
				)
			)

	init, init_name = _effective_initializer(cls)
	if init is None:
		add(init_name, [((), ())], cls)
	else:
		shapes = _positional_shapes(init, skip_first=True, qualname=f"{owner_name}.{init_name}")
		if shapes is not None:
			add(init_name, shapes, cls)

	for attr, raw in cls.__dict__.items():
		if not is_marked_constructor(raw):
			continue
		func = raw.__func__ if isinstance(raw, (classmethod, staticmethod)) else raw
		shapes = _positional_shapes(
			func,
			skip_first=isinstance(raw, classmethod),
			qualname=f"{owner_name}.{attr}",
		)
		if shapes:
			add(attr, shapes, getattr(cls, attr))
	return found


class ConstructorIndex:
	"""
	Candidate retrieval over a catalog's declared constructors.

	Results are cached per type for the lifetime of the index, so the same
	descriptor objects (and their accessibility flags) are returned every time.
	"""

	def __init__(self, catalog: TypeCatalog) -> None:
		self._catalog = catalog
		self._by_type: Dict[TypeHandle, Tuple[ConstructorDescriptor, ...]] = {}
		self._lock = threading.Lock()

	@property
	def catalog(self) -> TypeCatalog:
		return self._catalog

	def constructors_of(self, ty: TypeHandle) -> Tuple[ConstructorDescriptor, ...]:
		cached = self._by_type.get(ty)
		if cached is None:
			ctors = tuple(self._catalog.declared_constructors(ty))
			with self._lock:
				cached = self._by_type.setdefault(ty, ctors)
		return cached

	def with_arity(self, ty: TypeHandle, arity: int) -> List[ConstructorDescriptor]:
		return [c for c in self.constructors_of(ty) if c.arity == arity]


__all__ = [
	"ConstructorDescriptor",
	"ConstructorIndex",
	"constructor",
	"is_marked_constructor",
	"is_restricted_name",
	"annotation_class",
	"reflect_constructors",
]
