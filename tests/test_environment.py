import os

import pytest

from devshell import settings
from devshell.descriptor import EnvironmentDescriptor, build_environment
from devshell.errors import DescriptorError, UnresolvablePackageError

SEP = os.pathsep
LIB_VAR = settings.LIBRARY_PATH_VAR


def descriptor(packages, env=None, **kwargs):
    return EnvironmentDescriptor.from_dict(dict(packages=packages, env=env or {}, **kwargs))


@pytest.mark.skipif(LIB_VAR == "PATH", reason="library path folds into PATH")
def test_library_path_variable(registry):
    env = build_environment(descriptor(["a", "b", "c", "a"]), registry, base={})
    assert env[LIB_VAR] == SEP.join(["/p/a", "/p/c", "/p/a"])
    assert env.packages.names() == ["a", "b", "c", "a"]


@pytest.mark.skipif(LIB_VAR == "PATH", reason="library path folds into PATH")
def test_library_path_set_even_when_empty(registry):
    env = build_environment(descriptor(["b"]), registry, base={})
    assert env[LIB_VAR] == ""


@pytest.mark.skipif(LIB_VAR == "PATH", reason="library path folds into PATH")
def test_bin_dirs_prepend_inherited_path(registry):
    env = build_environment(descriptor(["c"]), registry, base={"PATH": "/usr/bin"})
    assert env["PATH"] == SEP.join(["/p/c/bin", "/usr/bin"])


def test_path_untouched_without_bin_dirs(registry):
    env = build_environment(descriptor(["a"], library_path_var="MY_LIBS"), registry, base={"PATH": "/usr/bin"})
    assert "PATH" not in env
    assert env["MY_LIBS"] == "/p/a"


def test_pkgconfig_path(registry):
    env = build_environment(descriptor(["a", "d"]), registry, base={})
    assert env["PKG_CONFIG_PATH"] == "/p/d/lib/pkgconfig"
    env = build_environment(descriptor(["a"]), registry, base={})
    assert "PKG_CONFIG_PATH" not in env


def test_static_env_wins(registry):
    env = build_environment(
        descriptor(["a"], env={"RUSTFLAGS": "-Awarnings", "MY_LIBS": "/override"}, library_path_var="MY_LIBS"),
        registry,
        base={},
    )
    assert env["RUSTFLAGS"] == "-Awarnings"
    assert env["MY_LIBS"] == "/override"


def test_unresolvable_aborts(registry):
    with pytest.raises(UnresolvablePackageError):
        build_environment(descriptor(["a", "missing"]), registry, base={})


def test_environment_is_read_only(registry):
    env = build_environment(descriptor(["a"], library_path_var="MY_LIBS"), registry, base={})
    with pytest.raises(TypeError):
        env["MY_LIBS"] = "x"
    assert dict(env) == {"MY_LIBS": "/p/a"}


def test_does_not_touch_process_environment(registry, monkeypatch):
    monkeypatch.delenv("MY_LIBS", raising=False)
    build_environment(descriptor(["a"], library_path_var="MY_LIBS"), registry)
    assert "MY_LIBS" not in os.environ


def test_descriptor_from_file(write_toml):
    path = write_toml("gfx/shell.toml", """
packages = ["wayland", "xorg.libX11", "wayland"]

[env]
RUST_BACKTRACE = 1
""")
    d = EnvironmentDescriptor.from_file(path)
    assert d.name == "gfx"
    assert d.packages == ("wayland", "xorg.libX11", "wayland")
    assert dict(d.env) == {"RUST_BACKTRACE": "1"}
    assert d.library_path_var == LIB_VAR


@pytest.mark.parametrize("data", [
    {"packages": "wayland"},
    {"packages": ["wayland", 3]},
    {"packages": [""]},
    {"packages": [], "env": {"X": True}},
    {"packages": [], "env": ["X"]},
    {"packages": [], "library_path_var": ""},
])
def test_descriptor_rejects_malformed(data):
    with pytest.raises(DescriptorError):
        EnvironmentDescriptor.from_dict(data)


def test_descriptor_missing_file(tmp_path):
    with pytest.raises(DescriptorError, match="cannot read descriptor"):
        EnvironmentDescriptor.from_file(tmp_path / "shell.toml")


def test_library_path_folded_into_path(registry):
    env = build_environment(descriptor(["a", "c"], library_path_var="PATH"), registry, base={"PATH": "/usr/bin"})
    assert env["PATH"] == SEP.join(["/p/a", "/p/c", "/p/c/bin", "/usr/bin"])
