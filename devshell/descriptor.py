"""
Environment descriptor: an ordered package list and the search paths
derived from it.

A PackageSet keeps declaration order and duplicates; both are visible in
the derived paths.
"""
import logging
import os
from collections import Counter, abc
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Tuple

import toml

from devshell import settings
from devshell.errors import DescriptorError

logger = logging.getLogger(__name__)


class PackageSet(tuple):
    def __getitem__(self, index):
        item = super().__getitem__(index)
        if isinstance(index, slice):
            return PackageSet(item)
        return item

    def names(self):
        return [package.name for package in self]

    def duplicates(self):
        counts = Counter(self.names())
        return [name for name in counts if counts[name] > 1]


def declare(names, registry):
    return PackageSet(registry.resolve(name) for name in names)


def make_search_path(packages, attr):
    dirs = [getattr(package, attr) for package in packages]
    return os.pathsep.join(d for d in dirs if d)


def compute_library_path(packages):
    return make_search_path(packages, "lib_dir")


@dataclass(frozen=True)
class EnvironmentDescriptor:
    name: str
    packages: Tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)
    library_path_var: str = settings.LIBRARY_PATH_VAR

    @classmethod
    def from_file(cls, path):
        path = Path(path).resolve()
        try:
            data = toml.load(str(path))
        except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as e:
            raise DescriptorError(f"cannot read descriptor {path}: {e}") from e
        return cls.from_dict(data, default_name=path.parent.name)

    @classmethod
    def from_dict(cls, data, default_name="default"):
        packages = data.get("packages", [])
        if not isinstance(packages, list) or not all(isinstance(p, str) and p for p in packages):
            raise DescriptorError("'packages' must be a list of package names")
        env = data.get("env", {})
        if not isinstance(env, dict):
            raise DescriptorError("[env] must be a table")
        for key, value in env.items():
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise DescriptorError(f"env variable {key} must be a string or number")
        library_path_var = data.get("library_path_var", settings.LIBRARY_PATH_VAR)
        if not isinstance(library_path_var, str) or not library_path_var:
            raise DescriptorError("'library_path_var' must be a non-empty string")
        return cls(
            name=str(data.get("name", default_name)),
            packages=tuple(packages),
            env=MappingProxyType({k: str(v) for k, v in env.items()}),
            library_path_var=library_path_var,
        )


class ShellEnvironment(abc.Mapping):
    """Immutable set of variables handed to child processes."""

    def __init__(self, variables, packages=PackageSet()):
        self._variables = dict(variables)
        self.packages = packages

    def __getitem__(self, key):
        return self._variables[key]

    def __iter__(self):
        return iter(self._variables)

    def __len__(self):
        return len(self._variables)

    def __repr__(self):
        return f"ShellEnvironment({self._variables!r})"


def _prepend(path, inherited):
    return os.pathsep.join(p for p in (path, inherited) if p)


def build_environment(descriptor, registry, base=None):
    base = os.environ if base is None else base
    packages = declare(descriptor.packages, registry)
    for name in packages.duplicates():
        logger.info("package %s is declared more than once", name)

    variables = {}
    library_path = compute_library_path(packages)
    pkgconfig_path = make_search_path(packages, "pkgconfig_dir")
    bin_path = make_search_path(packages, "bin_dir")

    if bin_path:
        variables[settings.BIN_PATH_VAR] = _prepend(bin_path, base.get(settings.BIN_PATH_VAR, ""))
    if pkgconfig_path:
        variables[settings.PKG_CONFIG_PATH_VAR] = pkgconfig_path
    if descriptor.library_path_var == settings.BIN_PATH_VAR:
        # windows resolves DLLs through PATH
        inherited = variables.get(settings.BIN_PATH_VAR, base.get(settings.BIN_PATH_VAR, ""))
        variables[settings.BIN_PATH_VAR] = _prepend(library_path, inherited)
    else:
        variables[descriptor.library_path_var] = library_path
    variables.update(descriptor.env)
    return ShellEnvironment(variables, packages)
