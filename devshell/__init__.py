from devshell.descriptor import (
    EnvironmentDescriptor,
    PackageSet,
    ShellEnvironment,
    build_environment,
    compute_library_path,
    declare,
    make_search_path,
)
from devshell.errors import DescriptorError, DevshellError, UnresolvablePackageError
from devshell.registry import ChainRegistry, PackageReference, PrefixRegistry, Registry, TableRegistry

__all__ = [
    "ChainRegistry",
    "DescriptorError",
    "DevshellError",
    "EnvironmentDescriptor",
    "PackageReference",
    "PackageSet",
    "PrefixRegistry",
    "Registry",
    "ShellEnvironment",
    "TableRegistry",
    "UnresolvablePackageError",
    "build_environment",
    "compute_library_path",
    "declare",
    "make_search_path",
]
