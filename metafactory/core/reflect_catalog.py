# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TypeCatalog backed by native Python reflection.

Handles are the classes themselves. The first base of a class is its parent;
the remaining bases (mixins, ABCs) are its interfaces. Python has no
primitive boxing of its own, so the primitive/boxed pairs default to the
`ctypes` simple types and the Python values they wrap; hosts can declare more.

Boxing affects scoring only: a value is passed to the constructor exactly as
given. A `c_int` argument resolved against an `int` parameter arrives as the
`c_int` object (read `.value` to unbox), and an `int` argument for a `c_int`
parameter arrives as a plain `int`.

ABCs are matched the way `isinstance` matches them: a class registered with
an ABC (or accepted by its `__subclasshook__`) is one hop away from it even
though the ABC never appears among its bases.
"""

from __future__ import annotations

import abc
import builtins
import ctypes
import importlib
import threading
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from metafactory.constructor_index import ConstructorDescriptor, reflect_constructors
from metafactory.core.errors import ClassNotFoundError


DEFAULT_BOXING: Tuple[Tuple[type, type], ...] = (
	(ctypes.c_bool, bool),
	(ctypes.c_byte, int),
	(ctypes.c_ubyte, int),
	(ctypes.c_short, int),
	(ctypes.c_ushort, int),
	(ctypes.c_int, int),
	(ctypes.c_uint, int),
	(ctypes.c_long, int),
	(ctypes.c_ulong, int),
	(ctypes.c_longlong, int),
	(ctypes.c_ulonglong, int),
	(ctypes.c_float, float),
	(ctypes.c_double, float),
	(ctypes.c_char_p, bytes),
	(ctypes.c_wchar_p, str),
)


class ReflectiveCatalog:
	"""Read-only view of the Python class hierarchy."""

	def __init__(self, boxing: Iterable[Tuple[type, type]] = DEFAULT_BOXING) -> None:
		self._pairs: Set[FrozenSet[type]] = set()
		self._primitives: Set[type] = set()
		self._aliases: Dict[str, type] = {}
		self._ctors: Dict[type, Tuple[ConstructorDescriptor, ...]] = {}
		self._lock = threading.Lock()
		for primitive, boxed in boxing:
			self.declare_boxing(primitive, boxed)

	def declare_boxing(self, primitive: type, boxed: type) -> None:
		"""Declare `primitive` and `boxed` as zero-distance equivalents."""
		if primitive is boxed:
			raise ValueError(f"cannot pair {primitive!r} with itself")
		self._pairs.add(frozenset((primitive, boxed)))
		self._primitives.add(primitive)

	def alias(self, name: str, cls: type) -> None:
		"""Make `lookup(name)` return `cls` (takes precedence over imports)."""
		if not isinstance(cls, type):
			raise TypeError(f"alias target must be a class, got {cls!r}")
		self._aliases[name] = cls

	# --- hierarchy ---------------------------------------------------------

	def parent_of(self, ty: type) -> Optional[type]:
		bases = ty.__bases__
		return bases[0] if bases else None

	def interfaces_of(self, ty: type) -> Tuple[type, ...]:
		return tuple(ty.__bases__[1:])

	def is_equivalent_primitive(self, a: type, b: type) -> bool:
		return frozenset((a, b)) in self._pairs

	def is_primitive(self, ty: type) -> bool:
		return ty in self._primitives

	def is_virtual_subtype(self, candidate: type, target: type) -> bool:
		"""ABC registrations and subclass hooks (`list` is a `Sequence`, `int` a `numbers.Number`)."""
		if not isinstance(target, abc.ABCMeta) or not isinstance(candidate, type):
			return False
		return issubclass(candidate, target)

	def is_type(self, obj: object) -> bool:
		return isinstance(obj, type)

	# --- naming ------------------------------------------------------------

	def name_of(self, ty: type) -> str:
		if ty.__module__ == "builtins":
			return ty.__qualname__
		return f"{ty.__module__}.{ty.__qualname__}"

	def lookup(self, name: str) -> type:
		"""
		Resolve `name` to a class.

		Accepts aliases, builtin names (`int`) and dotted paths where the
		longest importable prefix is the module and the rest is an attribute
		chain (`pkg.mod.Outer.Inner`).
		"""
		if name in self._aliases:
			return self._aliases[name]
		if not name or any(not part.isidentifier() for part in name.split(".")):
			raise ClassNotFoundError(f"invalid type identifier {name!r}")
		parts = name.split(".")
		if len(parts) == 1:
			found = getattr(builtins, name, None)
			if isinstance(found, type):
				return found
			raise ClassNotFoundError(f"class {name} not found")
		for split in range(len(parts) - 1, 0, -1):
			module_name = ".".join(parts[:split])
			try:
				obj: object = importlib.import_module(module_name)
			except ModuleNotFoundError as exc:
				# Only a missing prefix is a reason to try a shorter one.
				if exc.name is not None and not module_name.startswith(exc.name):
					raise ClassNotFoundError(f"class {name} not found: {exc}") from exc
				continue
			for attr in parts[split:]:
				obj = getattr(obj, attr, None)
				if obj is None:
					break
			if isinstance(obj, type):
				return obj
			raise ClassNotFoundError(f"class {name} not found")
		raise ClassNotFoundError(f"class {name} not found")

	# --- values ------------------------------------------------------------

	def type_of(self, value: object) -> type:
		return type(value)

	def is_instance(self, value: object, ty: type) -> bool:
		return isinstance(value, ty)

	# --- constructors ------------------------------------------------------

	def declared_constructors(self, ty: type) -> Tuple[ConstructorDescriptor, ...]:
		cached = self._ctors.get(ty)
		if cached is None:
			found: List[ConstructorDescriptor] = reflect_constructors(ty, self)
			with self._lock:
				cached = self._ctors.setdefault(ty, tuple(found))
		return cached


_default_catalog: Optional[ReflectiveCatalog] = None
_default_lock = threading.Lock()


def default_catalog() -> ReflectiveCatalog:
	"""Process-wide reflective catalog with the default boxing table."""
	global _default_catalog
	with _default_lock:
		if _default_catalog is None:
			_default_catalog = ReflectiveCatalog()
		return _default_catalog


__all__ = ["DEFAULT_BOXING", "ReflectiveCatalog", "default_catalog"]
