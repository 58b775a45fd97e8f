# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Runtime knobs for resolution and factory reuse.

Defaults suit library use; the environment can override them for a whole
process (handy when chasing a resolution problem with caches off):

  METAFACTORY_CACHE_DISTANCES   memoize distance scores per catalog scorer
  METAFACTORY_CACHE_FACTORIES   reuse factories per (type, signature)
  METAFACTORY_CHECK_ARGUMENTS   verify factory arguments against the resolved signature
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
	raw = env.get(key)
	if raw is None or raw.strip() == "":
		return default
	val = raw.strip().lower()
	if val in _TRUE:
		return True
	if val in _FALSE:
		return False
	raise ValueError(f"{key} must be one of {sorted(_TRUE | _FALSE)}, got {raw!r}")


@dataclass(frozen=True)
class MetafactoryConfig:
	cache_distances: bool = True
	cache_factories: bool = True
	check_arguments: bool = True

	@classmethod
	def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "MetafactoryConfig":
		env = os.environ if env is None else env
		return cls(
			cache_distances=_env_flag(env, "METAFACTORY_CACHE_DISTANCES", True),
			cache_factories=_env_flag(env, "METAFACTORY_CACHE_FACTORIES", True),
			check_arguments=_env_flag(env, "METAFACTORY_CHECK_ARGUMENTS", True),
		)


__all__ = ["MetafactoryConfig"]
