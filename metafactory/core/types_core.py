# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Registered type graph: a TypeCatalog for hierarchies declared by hand.

TypeIds are opaque ints indexing into a TypeTable. TypeKind keeps the universe
small; TypeDef carries kind/name/parent/interfaces for inspection. Parents and
interfaces must be registered before the types that use them, so the graph is
acyclic by construction.

Use this when the hierarchy to resolve against is not the Python class
hierarchy itself, e.g. a Java-like model where `String` extends `Object`
and `int` boxes to `Integer`.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from metafactory.constructor_index import ConstructorDescriptor, is_restricted_name
from metafactory.core.errors import ClassNotFoundError


TypeId = int  # opaque handle into the TypeTable


class TypeKind(Enum):
	"""Kinds of types understood by the registered graph."""

	CLASS = auto()
	INTERFACE = auto()
	PRIMITIVE = auto()


@dataclass(frozen=True)
class TypeDef:
	"""Definition of a type stored in the TypeTable."""

	kind: TypeKind
	name: str
	parent: Optional[TypeId]
	interfaces: Tuple[TypeId, ...]
	python_type: Optional[type] = None  # runtime class whose values map to this type


class TypeTable:
	"""
	Simple type table that owns TypeIds and their constructors.

	Registration happens up front; afterwards the table is only read, so
	concurrent resolution over one table needs no coordination.
	"""

	def __init__(self) -> None:
		self._defs: Dict[TypeId, TypeDef] = {}
		self._by_name: Dict[str, TypeId] = {}
		self._by_python_type: Dict[type, TypeId] = {}
		self._pairs: Set[FrozenSet[TypeId]] = set()
		self._ctors: Dict[TypeId, List[ConstructorDescriptor]] = {}
		self._next_id: TypeId = 1  # reserve 0 for "invalid"
		self._object_type: TypeId | None = None
		self._lock = threading.Lock()

	# --- registration ------------------------------------------------------

	def new_class(
		self,
		name: str,
		parent: Optional[TypeId] = None,
		interfaces: Sequence[TypeId] = (),
		*,
		python_type: Optional[type] = None,
	) -> TypeId:
		"""Register a class type with an optional single parent."""
		if parent is not None and self.get(parent).kind is not TypeKind.CLASS:
			raise ValueError(f"parent of {name} must be a class type, got {self.get(parent).name}")
		return self._add(TypeKind.CLASS, name, parent, interfaces, python_type)

	def new_interface(self, name: str, extends: Sequence[TypeId] = (), *, python_type: Optional[type] = None) -> TypeId:
		"""Register an interface type; `extends` become its interfaces."""
		return self._add(TypeKind.INTERFACE, name, None, extends, python_type)

	def new_primitive(self, name: str, *, python_type: Optional[type] = None) -> TypeId:
		"""Register a primitive value type (no parent, no interfaces)."""
		return self._add(TypeKind.PRIMITIVE, name, None, (), python_type)

	def ensure_object(self) -> TypeId:
		"""Return a stable root `Object` class TypeId, creating it once."""
		if self._object_type is None:
			self._object_type = self.new_class("Object")
		return self._object_type

	def declare_boxing(self, primitive: TypeId, boxed: TypeId) -> None:
		"""Declare a primitive/boxed pair; distance between them is 0 in either direction."""
		if self.get(primitive).kind is not TypeKind.PRIMITIVE:
			raise ValueError(f"{self.get(primitive).name} is not a primitive type")
		if primitive == boxed:
			raise ValueError(f"cannot pair {self.get(primitive).name} with itself")
		self.get(boxed)
		self._pairs.add(frozenset((primitive, boxed)))

	def add_constructor(
		self,
		owner: TypeId,
		param_types: Sequence[TypeId],
		fn: Callable[..., Any],
		*,
		name: str = "<init>",
		public: Optional[bool] = None,
		param_names: Sequence[str] = (),
	) -> ConstructorDescriptor:
		"""
		Register a constructor for `owner`.

		`fn` receives the positional arguments and returns the instance.
		Visibility defaults to the naming rule (`_name` is restricted).
		Registration order is the tie-break order.
		"""
		owner_def = self.get(owner)
		if owner_def.kind is not TypeKind.CLASS:
			raise ValueError(f"only class types have constructors, not {owner_def.name}")
		for ty in param_types:
			self.get(ty)
		bucket = self._ctors.setdefault(owner, [])
		desc = ConstructorDescriptor(
			owner=owner,
			owner_name=owner_def.name,
			name=name,
			param_types=param_types,
			param_type_names=[self.get(ty).name for ty in param_types],
			target=fn,
			is_public=(not is_restricted_name(name)) if public is None else public,
			param_names=param_names,
			ordinal=len(bucket),
		)
		bucket.append(desc)
		return desc

	def _add(
		self,
		kind: TypeKind,
		name: str,
		parent: Optional[TypeId],
		interfaces: Sequence[TypeId],
		python_type: Optional[type],
	) -> TypeId:
		with self._lock:
			if name in self._by_name:
				raise ValueError(f"duplicate type name {name!r}")
			for iface in interfaces:
				if self.get(iface).kind is not TypeKind.INTERFACE:
					raise ValueError(f"{self.get(iface).name} is not an interface type")
			ty_id = self._next_id
			self._next_id += 1
			self._defs[ty_id] = TypeDef(
				kind=kind,
				name=name,
				parent=parent,
				interfaces=tuple(interfaces),
				python_type=python_type,
			)
			self._by_name[name] = ty_id
			if python_type is not None:
				self._by_python_type.setdefault(python_type, ty_id)
			return ty_id

	def get(self, ty: TypeId) -> TypeDef:
		"""Fetch the TypeDef for a given TypeId."""
		try:
			return self._defs[ty]
		except (KeyError, TypeError):
			raise ClassNotFoundError(f"unknown type id {ty!r}") from None

	# --- TypeCatalog -------------------------------------------------------

	def parent_of(self, ty: TypeId) -> Optional[TypeId]:
		return self.get(ty).parent

	def interfaces_of(self, ty: TypeId) -> Tuple[TypeId, ...]:
		return self.get(ty).interfaces

	def is_equivalent_primitive(self, a: TypeId, b: TypeId) -> bool:
		return frozenset((a, b)) in self._pairs

	def is_primitive(self, ty: TypeId) -> bool:
		return self.get(ty).kind is TypeKind.PRIMITIVE

	def is_virtual_subtype(self, candidate: TypeId, target: TypeId) -> bool:
		return False  # every link is declared

	def is_type(self, obj: object) -> bool:
		return isinstance(obj, int) and not isinstance(obj, bool) and obj in self._defs

	def name_of(self, ty: TypeId) -> str:
		return self.get(ty).name

	def lookup(self, name: str) -> TypeId:
		try:
			return self._by_name[name]
		except KeyError:
			raise ClassNotFoundError(f"class {name} not found") from None

	def type_of(self, value: object) -> TypeId:
		"""Map a runtime value to the first registered type bound to a class in its MRO."""
		for cls in type(value).__mro__:
			ty = self._by_python_type.get(cls)
			if ty is not None:
				return ty
		raise ClassNotFoundError(f"no registered type for values of {type(value).__qualname__}")

	def is_instance(self, value: object, ty: TypeId) -> bool:
		try:
			actual = self.type_of(value)
		except ClassNotFoundError:
			return False
		return self._reaches(actual, ty)

	def declared_constructors(self, ty: TypeId) -> Tuple[ConstructorDescriptor, ...]:
		self.get(ty)
		return tuple(self._ctors.get(ty, ()))

	def _reaches(self, start: TypeId, goal: TypeId) -> bool:
		seen: Set[TypeId] = set()
		stack = [start]
		while stack:
			cur = stack.pop()
			if cur == goal:
				return True
			if cur in seen:
				continue
			seen.add(cur)
			td = self._defs[cur]
			if td.parent is not None:
				stack.append(td.parent)
			stack.extend(td.interfaces)
		return False


__all__ = ["TypeId", "TypeKind", "TypeDef", "TypeTable"]
