"""
Utilities for building the environment used by the Pi backend SDK.

Values come from three layers: a ``.env.<PI_ENV>`` file, the process
environment and explicit overrides. The result is a plain mapping that
:class:`pi_backend.core.config.SdkConfig` knows how to read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

DEFAULT_PI_ENV = "development"


def default_env_file(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return ``.env.<PI_ENV>``, falling back to ``.env.development``."""
    source = environ if environ is not None else os.environ
    return f".env.{source.get('PI_ENV') or DEFAULT_PI_ENV}"


def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def load_env_file(
    path: Optional[str] = None,
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Load environment variables from ``path`` into ``environ``.

    Existing keys are preserved. The merged mapping is returned so callers can
    inspect the resulting values.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    values = _parse_env_file(Path(path or default_env_file(target)))
    for key, value in values.items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class SdkEnvironment:
    """
    A resolved set of environment variables used to configure the SDK.
    """

    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = None,
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
    skip_env_file: bool = False,
) -> SdkEnvironment:
    """
    Assemble a :class:`SdkEnvironment` from multiple sources.

    ``base`` defaults to :data:`os.environ`. When ``env_file`` is ``None`` the
    file is derived from ``PI_ENV``; pass ``skip_env_file=True`` to avoid
    reading any file. ``overrides`` always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if not skip_env_file:
        path = Path(env_file or default_env_file(merged))
        for key, value in _parse_env_file(path).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return SdkEnvironment(variables=merged)
