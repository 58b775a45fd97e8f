# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
metafactory: build objects by picking the most specific constructor at runtime.

Layers (leaves first):
  core: type catalogs (reflective and registered) and the error taxonomy
  constructor_index: constructor descriptors and per-type candidate lists
  distance: hierarchy distance between argument and parameter types
  resolver: minimum-distance constructor selection
  invoker: privileged-aware constructor invocation
  factory: immutable ClassFactory bindings
  meta_class: MetaClass handles and `open_class`
"""

from metafactory.config import MetafactoryConfig
from metafactory.constructor_index import ConstructorDescriptor, ConstructorIndex, constructor
from metafactory.core.errors import (
	ArgumentMismatchError,
	ClassCastError,
	ClassCreationError,
	ClassNotFoundError,
	ConstructorNotFoundError,
	IllegalAccessError,
	InvocationError,
)
from metafactory.core.reflect_catalog import ReflectiveCatalog, default_catalog
from metafactory.core.types_core import TypeId, TypeKind, TypeTable
from metafactory.distance import UNRELATED, DistanceScorer
from metafactory.factory import ClassFactory
from metafactory.invoker import invoke
from metafactory.meta_class import MetaClass, open_class
from metafactory.resolver import resolve_constructor

__all__ = [
	"MetafactoryConfig",
	"ConstructorDescriptor",
	"ConstructorIndex",
	"constructor",
	"ArgumentMismatchError",
	"ClassCastError",
	"ClassCreationError",
	"ClassNotFoundError",
	"ConstructorNotFoundError",
	"IllegalAccessError",
	"InvocationError",
	"ReflectiveCatalog",
	"default_catalog",
	"TypeId",
	"TypeKind",
	"TypeTable",
	"UNRELATED",
	"DistanceScorer",
	"ClassFactory",
	"invoke",
	"MetaClass",
	"open_class",
	"resolve_constructor",
]
