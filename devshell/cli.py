import argparse
import logging
import shlex
import sys

from devshell import settings
from devshell.descriptor import EnvironmentDescriptor, build_environment, compute_library_path
from devshell.errors import DevshellError
from devshell.registry import ChainRegistry, PrefixRegistry, TableRegistry
from devshell.shell import enter, run_in_environment

logger = logging.getLogger("devshell")


def setup_logging(quiet=False):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.WARNING if quiet else settings.LOG_LEVEL)


def load_registry(registry_path, prefix):
    registries = []
    if prefix:
        registries.append(PrefixRegistry(prefix))
    if registry_path:
        registries.append(TableRegistry.from_file(registry_path))
    return ChainRegistry(*registries)


def cmd_packages(args, descriptor, env):
    for package in env.packages:
        print(f"{package.name}\tlib={package.lib_dir or '-'}\tbin={package.bin_dir or '-'}")
    for name in env.packages.duplicates():
        print(f"# {name} is declared more than once")
    return 0


def cmd_libpath(args, descriptor, env):
    print(compute_library_path(env.packages))
    return 0


def cmd_env(args, descriptor, env):
    for name, value in env.items():
        if args.export:
            print(f"export {name}={shlex.quote(value)}")
        else:
            print(f"{name}={value}")
    return 0


def cmd_run(args, descriptor, env):
    argv = args.argv[1:] if args.argv[:1] == ["--"] else args.argv
    if not argv:
        print("devshell run: no command given", file=sys.stderr)
        return 2
    return run_in_environment(env, argv, echo=not args.quiet)


def cmd_shell(args, descriptor, env):
    return enter(env, shell=args.shell, echo=not args.quiet)


def make_parser():
    parser = argparse.ArgumentParser(prog="devshell", description="Development shell environments")
    parser.add_argument("-f", "--file", default=settings.DESCRIPTOR_PATH, help="shell descriptor (toml)")
    parser.add_argument("--registry", default=settings.REGISTRY_PATH, help="package registry (toml)")
    parser.add_argument("--prefix", default=settings.PREFIX, help="install prefix searched before the registry")
    parser.add_argument("-q", "--quiet", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("packages", help="list resolved packages").set_defaults(func=cmd_packages)
    sub.add_parser("libpath", help="print the library search path").set_defaults(func=cmd_libpath)

    p = sub.add_parser("env", help="print the environment variables")
    p.add_argument("--export", action="store_true", help="shell export syntax")
    p.set_defaults(func=cmd_env)

    p = sub.add_parser("run", help="run a command in the environment")
    p.add_argument("argv", nargs=argparse.REMAINDER)
    p.set_defaults(func=cmd_run)

    p = sub.add_parser("shell", help="enter an interactive shell")
    p.add_argument("--shell", default=None)
    p.set_defaults(func=cmd_shell)
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    setup_logging(args.quiet)
    try:
        descriptor = EnvironmentDescriptor.from_file(args.file)
        registry = load_registry(args.registry, args.prefix)
        env = build_environment(descriptor, registry)
    except DevshellError as e:
        print(f"devshell: {e}", file=sys.stderr)
        return 1
    return args.func(args, descriptor, env)
