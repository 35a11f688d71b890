"""
Package registries: resolve a package name to where it is installed.

Names are opaque strings. Dotted names (``xorg.libX11``, ``mesa.drivers``)
are attribute paths, mapped to nested tables by TableRegistry and to nested
directories by PrefixRegistry.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import toml

from devshell.errors import DescriptorError, UnresolvablePackageError

logger = logging.getLogger(__name__)

# scalar keys of a registry table entry -> PackageReference field
ENTRY_KEYS = {
    "prefix": "prefix",
    "lib": "lib_dir",
    "bin": "bin_dir",
    "pkgconfig": "pkgconfig_dir",
}

SEPARATORS = {"/", os.sep, os.altsep} - {None}


@dataclass(frozen=True)
class PackageReference:
    name: str
    prefix: Optional[str] = None
    lib_dir: Optional[str] = None
    bin_dir: Optional[str] = None
    pkgconfig_dir: Optional[str] = None


class Registry:
    def lookup(self, name):
        raise NotImplementedError

    def resolve(self, name):
        package = self.lookup(name)
        if package is None:
            raise UnresolvablePackageError(name)
        logger.debug("resolved %s -> %s", name, package)
        return package


class TableRegistry(Registry):
    def __init__(self, packages=None):
        self.packages = dict(packages or {})

    def lookup(self, name):
        return self.packages.get(name)

    @classmethod
    def from_file(cls, path):
        path = Path(path).resolve()
        try:
            data = toml.load(str(path))
        except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as e:
            raise DescriptorError(f"cannot read registry {path}: {e}") from e
        table = data.get("packages", {})
        if not isinstance(table, dict):
            raise DescriptorError(f"{path}: [packages] must be a table")
        packages = {}
        _flatten(table, "", path.parent, packages)
        logger.info("loaded %d packages from %s", len(packages), path)
        return cls(packages)


def _flatten(table, namespace, base_dir, out):
    for key, value in table.items():
        if not isinstance(value, dict):
            continue
        name = f"{namespace}.{key}" if namespace else key
        fields = {}
        for entry_key, field in ENTRY_KEYS.items():
            if entry_key in value:
                if not isinstance(value[entry_key], str):
                    raise DescriptorError(f"{name}: '{entry_key}' must be a string")
                fields[field] = str(base_dir / Path(value[entry_key]).expanduser())
        unknown = [k for k, v in value.items() if not isinstance(v, dict) and k not in ENTRY_KEYS]
        if unknown:
            raise DescriptorError(f"{name}: unknown keys {', '.join(unknown)}")
        if fields:
            out[name] = PackageReference(name, **fields)
        _flatten(value, name, base_dir, out)


class PrefixRegistry(Registry):
    def __init__(self, prefix):
        self.prefix = Path(prefix)

    def lookup(self, name):
        segments = name.split(".")
        # names stay inside the prefix
        if not all(segments) or any(sep in name for sep in SEPARATORS):
            logger.warning("ignoring package name %r: not a path below %s", name, self.prefix)
            return None
        root = self.prefix.joinpath(*segments)
        if not root.is_dir():
            return None
        lib_dir = root / "lib"
        bin_dir = root / "bin"
        pkgconfig_dir = lib_dir / "pkgconfig"
        return PackageReference(
            name,
            prefix=str(root),
            lib_dir=str(lib_dir) if lib_dir.is_dir() else None,
            bin_dir=str(bin_dir) if bin_dir.is_dir() else None,
            pkgconfig_dir=str(pkgconfig_dir) if pkgconfig_dir.is_dir() else None,
        )


class ChainRegistry(Registry):
    def __init__(self, *registries):
        self.registries = registries

    def lookup(self, name):
        for registry in self.registries:
            package = registry.lookup(name)
            if package is not None:
                return package
        return None
