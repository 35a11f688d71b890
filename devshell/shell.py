import logging
import shlex

from devshell import settings
from devshell.common import run_shell

logger = logging.getLogger(__name__)


def run_in_environment(env, argv, cwd=None, echo=True):
    completed = run_shell(shlex.join(argv), cwd=cwd, extra_env=env, check=False, echo=echo)
    logger.debug("%s exited with %d", argv[0], completed.returncode)
    return completed.returncode


def enter(env, shell=None, echo=True):
    shell = shell or settings.DEFAULT_SHELL
    logger.info("entering %s with %d packages", shell, len(env.packages))
    return run_in_environment(env, [shell], echo=echo)
