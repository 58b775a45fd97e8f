# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ClassFactory: a resolved constructor bound to its (type, signature) key.

A factory is built once per distinct request and then invoked any number of
times. It holds no per-call state and cannot be mutated, so it can be shared
across threads and kept for the life of the process. Equality and hashing
use the catalog (by identity), the target type and the requested parameter
types; the resolved constructor follows deterministically from those. Handles
from different catalogs never compare equal, even when they look alike
(TypeIds of two TypeTables are both small ints).
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from metafactory.constructor_index import ConstructorDescriptor, ConstructorIndex
from metafactory.core.errors import ArgumentMismatchError, ClassCastError, ClassNotFoundError
from metafactory.core.types_protocol import TypeCatalog, TypeHandle
from metafactory.distance import DistanceScorer
from metafactory.invoker import invoke
from metafactory.resolver import resolve_constructor


class ClassFactory:
	"""Creates instances of one type through one resolved constructor."""

	__slots__ = ("_catalog", "_scorer", "_target", "_param_types", "_constructor", "_check_arguments")

	def __init__(
		self,
		catalog: TypeCatalog,
		target: TypeHandle,
		param_types: Sequence[TypeHandle],
		constructor: ConstructorDescriptor,
		*,
		scorer: Optional[DistanceScorer] = None,
		check_arguments: bool = True,
	) -> None:
		param_types = tuple(param_types)
		if constructor.arity != len(param_types):
			raise ValueError(
				f"constructor {constructor.signature()} does not take {len(param_types)} argument(s)"
			)
		set_ = object.__setattr__
		set_(self, "_catalog", catalog)
		set_(self, "_scorer", scorer if scorer is not None else DistanceScorer(catalog))
		set_(self, "_target", target)
		set_(self, "_param_types", param_types)
		set_(self, "_constructor", constructor)
		set_(self, "_check_arguments", check_arguments)

	@classmethod
	def resolve(
		cls,
		index: ConstructorIndex,
		scorer: DistanceScorer,
		target: TypeHandle,
		param_types: Sequence[TypeHandle],
		*,
		check_arguments: bool = True,
	) -> "ClassFactory":
		"""Resolve the best constructor for `param_types` and bind it (ConstructorNotFoundError otherwise)."""
		param_types = tuple(param_types)
		ctor = resolve_constructor(index, scorer, target, param_types)
		return cls(index.catalog, target, param_types, ctor, scorer=scorer, check_arguments=check_arguments)

	def __setattr__(self, name: str, value: Any) -> None:
		raise AttributeError(f"{type(self).__name__} is immutable")

	def __delattr__(self, name: str) -> None:
		raise AttributeError(f"{type(self).__name__} is immutable")

	@property
	def target(self) -> TypeHandle:
		return self._target

	@property
	def param_types(self) -> Tuple[TypeHandle, ...]:
		return self._param_types

	@property
	def constructor(self) -> ConstructorDescriptor:
		return self._constructor

	@property
	def name(self) -> str:
		"""Name of the type this factory produces."""
		return self._catalog.name_of(self._target)

	def create_instance(self, *values: Any, expect: Optional[TypeHandle] = None) -> Any:
		"""
		Build an instance from `values`.

		With `expect`, the result must satisfy that capability or ClassCastError
		is raised. Failures inside the constructor raise InvocationError.
		"""
		if self._check_arguments:
			self._check_values(values)
		obj = invoke(self._constructor, values)
		if expect is not None and not self._catalog.is_instance(obj, expect):
			raise ClassCastError(
				f"cannot cast {self._produced_name(obj)} into {self._catalog.name_of(expect)}"
			)
		return obj

	def _check_values(self, values: Sequence[Any]) -> None:
		declared = self._constructor.param_types
		if len(values) != len(declared):
			raise ArgumentMismatchError(
				f"{self!r} expects {len(declared)} argument(s), got {len(values)}"
			)
		for pos, (value, param) in enumerate(zip(values, declared)):
			try:
				actual = self._catalog.type_of(value)
			except ClassNotFoundError as exc:
				raise ArgumentMismatchError(f"argument {pos} to {self!r}: {exc}") from exc
			if not self._scorer.is_assignable(actual, param):
				raise ArgumentMismatchError(
					f"argument {pos} to {self!r} is {self._catalog.name_of(actual)}, "
					f"not assignable to {self._catalog.name_of(param)}"
				)

	def _produced_name(self, obj: Any) -> str:
		try:
			return self._catalog.name_of(self._catalog.type_of(obj))
		except ClassNotFoundError:
			return type(obj).__qualname__

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, ClassFactory):
			return NotImplemented
		return (
			self._catalog is other._catalog
			and self._target == other._target
			and self._param_types == other._param_types
		)

	def __hash__(self) -> int:
		return hash((id(self._catalog), self._target, self._param_types))

	def __repr__(self) -> str:
		params = ", ".join(self._catalog.name_of(t) for t in self._param_types)
		return f"ClassFactory({self.name}({params}))"


__all__ = ["ClassFactory"]
