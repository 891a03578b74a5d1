import sys
from datetime import timedelta

from rich.console import Console

from helmsman import *

console = Console()
registry = Registry("helmsman-demo", "helmsman-demo shows subcommand dispatch.")


def version(args):
    """print the version and exit"""
    console.print(f"helmsman {__version__}")


def export(args):
    if not args:
        return "export: no input files"
    for file in args:
        console.print(f"exporting {file} to {output.value or 'stdout'}", highlight=False)
        if verbose.value:
            console.print(f"  (timeout {timeout})", highlight=False)


command = Command(
    export,
    usage="export [-v] [-o <outfile>] [--timeout <duration>] <file>...",
    short="export some data",
    long="Export writes every given file to standard output, or to the file named by -o.",
)
verbose = command.bool("v", False, "cause export to be verbose")
output = command.string("o", "", "output to a file")
timeout = command.duration("timeout", timedelta(seconds=30), "give up after this long")

registry.register("version", Command(version, usage="version"))
registry.register("export", command)
registry.register("durations", Command(
    usage="durations",
    short="duration syntax",
    long="Durations are written as 300ms, 1.5s, 2h45m; units are ns, us, ms, s, m and h.",
))


if __name__ == '__main__':
    sys.exit(registry.main())
