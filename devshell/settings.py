import os
import sys
from pathlib import Path

################## PATHS #####################
HOME = os.path.expanduser("~")
PACKAGE_DIR = Path(__file__).resolve().parent
SHELLS_DIR = Path(os.environ.get("DEVSHELL_SHELLS_DIR", PACKAGE_DIR / "shells"))

DESCRIPTOR_PATH = os.environ.get("DEVSHELL_DESCRIPTOR", f"{SHELLS_DIR}/default/shell.toml")
REGISTRY_PATH = os.environ.get("DEVSHELL_REGISTRY", f"{SHELLS_DIR}/registry.toml")
# packages installed as <PREFIX>/<name>/{lib,bin}; unset means table registry only
PREFIX = os.environ.get("DEVSHELL_PREFIX", "")

################## ENV VARS #####################
if sys.platform == "darwin":
    LIBRARY_PATH_VAR = "DYLD_LIBRARY_PATH"
elif sys.platform == "win32":
    LIBRARY_PATH_VAR = "PATH"
else:
    LIBRARY_PATH_VAR = "LD_LIBRARY_PATH"

PKG_CONFIG_PATH_VAR = "PKG_CONFIG_PATH"
BIN_PATH_VAR = "PATH"

DEFAULT_SHELL = os.environ.get("SHELL", "/bin/sh")

################## LOGGING #####################
LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"
LOG_LEVEL = os.environ.get("DEVSHELL_LOG_LEVEL", "INFO").upper()
