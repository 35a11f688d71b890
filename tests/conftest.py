import logging

import pytest

from devshell.registry import PackageReference, TableRegistry


@pytest.fixture
def registry():
    return TableRegistry({
        "a": PackageReference("a", lib_dir="/p/a"),
        "b": PackageReference("b", prefix="/p/b"),
        "c": PackageReference("c", lib_dir="/p/c", bin_dir="/p/c/bin"),
        "d": PackageReference("d", lib_dir="/p/d", pkgconfig_dir="/p/d/lib/pkgconfig"),
    })


@pytest.fixture
def write_toml(tmp_path):
    def write(name, text):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path
    return write


@pytest.fixture(autouse=True)
def reset_cli_logging():
    yield
    logging.getLogger("devshell").handlers.clear()
