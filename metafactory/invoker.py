# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Run a resolved constructor.

Restricted constructors are called through the descriptor's privileged
path; the grant ends when the call returns or raises. Whatever the
constructor body raises comes back as InvocationError with the original
exception attached.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from metafactory.constructor_index import ConstructorDescriptor
from metafactory.core.errors import ClassCreationError, InvocationError

logger = logging.getLogger(__name__)


def invoke(ctor: ConstructorDescriptor, values: Sequence[Any]) -> Any:
	"""
	Construct an instance with `ctor` and `values`.

	Precondition: `values` fit the constructor's declared parameter types. The
	arity is checked here; callers that may pass foreign values should check
	assignability first (ClassFactory does).
	"""
	if len(values) != ctor.arity:
		raise ClassCreationError(
			f"precondition violated: {ctor.signature()} takes {ctor.arity} argument(s), got {len(values)}"
		)
	try:
		if ctor.accessible:
			return ctor.new_instance(*values)
		logger.debug("privileged construction via %s", ctor.signature())
		with ctor.privileged():
			return ctor.new_instance(*values)
	except Exception as exc:
		raise InvocationError(f"constructor {ctor.signature()} failed: {exc!r}", cause=exc) from exc


__all__ = ["invoke"]
