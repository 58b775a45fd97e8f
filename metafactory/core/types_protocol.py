# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type-catalog protocol shared by the resolver, the scorer and the factories.

The catalog deliberately avoids committing to a concrete type representation:
callers treat the returned objects as opaque handles. `ReflectiveCatalog`
hands out Python classes, `TypeTable` hands out integer `TypeId`s; the
distance/resolution code works the same over both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, Tuple

if TYPE_CHECKING:
	from metafactory.constructor_index import ConstructorDescriptor


TypeHandle = Any  # opaque; hashable and comparable with ==


class TypeCatalog(Protocol):
	"""Read-only view of a type system, as needed to pick and run constructors."""

	def parent_of(self, ty: TypeHandle) -> Optional[TypeHandle]:
		"""Return the single direct supertype of `ty`, or None for a root type."""
		...

	def interfaces_of(self, ty: TypeHandle) -> Tuple[TypeHandle, ...]:
		"""Return the capability types `ty` directly implements/extends (may be empty)."""
		...

	def is_equivalent_primitive(self, a: TypeHandle, b: TypeHandle) -> bool:
		"""True iff `a` and `b` are a declared primitive/boxed pair (either order)."""
		...

	def is_primitive(self, ty: TypeHandle) -> bool:
		"""True iff `ty` is a primitive value type (one side of a boxing pair)."""
		...

	def is_virtual_subtype(self, candidate: TypeHandle, target: TypeHandle) -> bool:
		"""
		True iff `candidate` is a subtype of `target` through a registration that
		`parent_of`/`interfaces_of` do not expose (ABC `register`, `__subclasshook__`).
		"""
		...

	def is_type(self, obj: object) -> bool:
		"""True iff `obj` is a handle this catalog knows about."""
		...

	def lookup(self, name: str) -> TypeHandle:
		"""
		Resolve a type identifier to a handle.

		Raises ClassNotFoundError when the identifier does not name a known type.
		"""
		...

	def type_of(self, value: object) -> TypeHandle:
		"""
		Return the handle for the runtime type of `value`.

		Raises ClassNotFoundError when the catalog has no handle for it.
		"""
		...

	def is_instance(self, value: object, ty: TypeHandle) -> bool:
		"""True iff `value` satisfies `ty`; used by the capability check after construction."""
		...

	def name_of(self, ty: TypeHandle) -> str:
		"""Human-readable name used in messages and the CLI."""
		...

	def declared_constructors(self, ty: TypeHandle) -> Sequence["ConstructorDescriptor"]:
		"""
		Every constructor declared by `ty`, restricted ones included.

		Order must be stable for a given type within one process; the resolver
		uses it to break ties.
		"""
		...


__all__ = ["TypeHandle", "TypeCatalog"]
