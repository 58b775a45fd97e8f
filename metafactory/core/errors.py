# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Failure taxonomy for class creation.

Every failure surfaced by resolution, invocation or the cast check derives
from `ClassCreationError`, so callers that only care about "could not build
the object" can catch one type. Nothing in this package retries: resolution
and invocation are deterministic for fixed inputs.
"""

from __future__ import annotations

from typing import Optional


class ClassCreationError(RuntimeError):
	"""Base class for everything that can go wrong while creating an instance."""


class ClassNotFoundError(ClassCreationError):
	"""Raised when a type identifier (or sample value) cannot be mapped to a catalog type."""


class ConstructorNotFoundError(ClassCreationError):
	"""Raised when no declared constructor admits the requested argument types."""


class ClassCastError(ClassCreationError):
	"""Raised when a constructed instance does not satisfy the expected capability."""


class IllegalAccessError(ClassCreationError):
	"""Raised when a restricted constructor is called without privileged access."""


class ArgumentMismatchError(ClassCreationError):
	"""Raised when values passed to a factory do not fit its resolved signature."""


class InvocationError(ClassCreationError):
	"""
	The resolved constructor itself failed.

	The original exception is kept both as `cause` and as `__cause__` (callers
	raise this with `raise InvocationError(...) from exc`).
	"""

	def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
		super().__init__(message)
		self.cause = cause


__all__ = [
	"ClassCreationError",
	"ClassNotFoundError",
	"ConstructorNotFoundError",
	"ClassCastError",
	"IllegalAccessError",
	"ArgumentMismatchError",
	"InvocationError",
]
