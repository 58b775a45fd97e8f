# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
MetaClass: the handle callers open on a type to build factories and instances.

Opening resolves the identifier immediately (ClassNotFoundError otherwise).
Factories are memoized per signature on the handle, and the constructor index
plus distance scorer are shared per catalog, so repeated requests against the
same type do not re-walk the hierarchy.

Note: the constructor chosen is the most specific one for the runtime types
of the arguments, not necessarily the one a static signature would name.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Tuple

from metafactory.config import MetafactoryConfig
from metafactory.constructor_index import ConstructorIndex
from metafactory.core.errors import ClassNotFoundError, ConstructorNotFoundError
from metafactory.core.reflect_catalog import default_catalog
from metafactory.core.types_protocol import TypeCatalog, TypeHandle
from metafactory.distance import DistanceScorer
from metafactory.factory import ClassFactory

logger = logging.getLogger(__name__)

# The pair lives on the catalog itself, so it is collected together with it.
_TOOLING_ATTR = "_metafactory_tooling"
_tooling_lock = threading.Lock()


def tooling_for(catalog: TypeCatalog, *, cache_distances: bool = True) -> Tuple[ConstructorIndex, DistanceScorer]:
	"""
	Return the (index, scorer) pair shared by every handle on `catalog`.

	With `cache_distances=False` the index is still shared but the scorer is
	a fresh, uncached one. A catalog that accepts no attributes (`__slots__`)
	gets a fresh pair on every call.
	"""
	with _tooling_lock:
		pair = getattr(catalog, _TOOLING_ATTR, None)
		if pair is None:
			pair = (ConstructorIndex(catalog), DistanceScorer(catalog, cache=True))
			try:
				setattr(catalog, _TOOLING_ATTR, pair)
			except AttributeError:
				logger.debug("%r takes no attributes; tooling is not shared", type(catalog).__name__)
	if cache_distances:
		return pair
	return pair[0], DistanceScorer(catalog, cache=False)


class MetaClass:
	"""Produces objects of one type from runtime-typed constructor arguments."""

	def __init__(
		self,
		identifier: Any,
		*,
		catalog: Optional[TypeCatalog] = None,
		config: Optional[MetafactoryConfig] = None,
	) -> None:
		self._catalog: TypeCatalog = catalog if catalog is not None else default_catalog()
		self._config = config if config is not None else MetafactoryConfig.from_env()
		if isinstance(identifier, str):
			self._target = self._catalog.lookup(identifier)
		elif self._catalog.is_type(identifier):
			self._target = identifier
		else:
			raise ClassNotFoundError(f"{identifier!r} is not a type known to the catalog")
		self._index, self._scorer = tooling_for(self._catalog, cache_distances=self._config.cache_distances)
		self._factories: Dict[Tuple[TypeHandle, ...], ClassFactory] = {}
		self._lock = threading.Lock()

	@property
	def target(self) -> TypeHandle:
		return self._target

	@property
	def name(self) -> str:
		return self._catalog.name_of(self._target)

	@property
	def catalog(self) -> TypeCatalog:
		return self._catalog

	@property
	def index(self) -> ConstructorIndex:
		return self._index

	@property
	def scorer(self) -> DistanceScorer:
		return self._scorer

	def build_factory(self, *param_types: TypeHandle) -> ClassFactory:
		"""Factory for a constructor accepting `param_types` (catalog handles)."""
		for pos, ty in enumerate(param_types):
			if not self._catalog.is_type(ty):
				raise ClassNotFoundError(f"parameter type {pos} ({ty!r}) is not a type known to the catalog")
		key = tuple(param_types)
		if self._config.cache_factories:
			cached = self._factories.get(key)
			if cached is not None:
				logger.debug("factory cache hit for %r", cached)
				return cached
		fact = ClassFactory.resolve(
			self._index,
			self._scorer,
			self._target,
			key,
			check_arguments=self._config.check_arguments,
		)
		if self._config.cache_factories:
			with self._lock:
				fact = self._factories.setdefault(key, fact)
		return fact

	def build_factory_from_names(self, *names: str) -> ClassFactory:
		"""Factory for a constructor accepting the named types (resolved via the catalog)."""
		return self.build_factory(*(self._catalog.lookup(n) for n in names))

	def build_factory_from_values(self, *values: Any) -> ClassFactory:
		"""Factory for a constructor accepting the runtime types of `values`."""
		return self.build_factory(*(self._catalog.type_of(v) for v in values))

	def create_instance(self, *values: Any, expect: Optional[TypeHandle] = None) -> Any:
		"""
		Build an instance, inferring the signature from `values`.

		With `expect`, the instance must satisfy that capability (ClassCastError otherwise).
		"""
		return self.build_factory_from_values(*values).create_instance(*values, expect=expect)

	def check_constructor(self, *values: Any) -> bool:
		"""
		True unless no constructor fits `values`.

		The check actually builds an instance; invocation and cast failures are
		not "no such constructor" and propagate.
		"""
		try:
			self.create_instance(*values)
		except ConstructorNotFoundError:
			return False
		return True

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, MetaClass):
			return NotImplemented
		return self._catalog is other._catalog and self._target == other._target

	def __hash__(self) -> int:
		return hash((id(self._catalog), self._target))

	def __str__(self) -> str:
		return self.name

	def __repr__(self) -> str:
		return f"MetaClass({self.name!r})"


def open_class(
	identifier: Any,
	*,
	catalog: Optional[TypeCatalog] = None,
	config: Optional[MetafactoryConfig] = None,
) -> MetaClass:
	"""Open a handle on `identifier` (name or catalog handle); ClassNotFoundError if unknown."""
	return MetaClass(identifier, catalog=catalog, config=config)


__all__ = ["MetaClass", "open_class", "tooling_for"]
