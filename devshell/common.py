import shlex
from subprocess import PIPE, run
from os import environ


def echo_command(cmd, extra_env=None):
    for name, value in (extra_env or {}).items():
        print(f"{name}={shlex.quote(value)}")
    print(cmd)


def run_shell(cmd, cwd=None, extra_env=None, capture_stdout=False, check=True, echo=True):
    if echo:
        echo_command(cmd, extra_env)
    env = None
    if extra_env:
        env = dict(environ)
        env.update(extra_env)
    return run(
        cmd,
        shell=True,
        check=check,
        cwd=cwd or None,
        env=env,
        stdout=PIPE if capture_stdout else None,
        text=capture_stdout,
    )
