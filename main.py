import sys

from rich.pretty import pprint

from argsmith import *

registry = Registry("program.name=copy,help.show=2")
registry.define(Arg("source", "file to read", Required))
registry.define(Arg("target", "file to write"))
registry.define(Flag("--mode", "-m", "copy strategy", Value("fast", name="mode", choices=("fast", "safe"))))
registry.define(Flag("--verbose", "-v", "talk more"))


if __name__ == '__main__':
    if not registry.parse(sys.argv) or registry.check("--help"):
        registry.print_help()
        registry.report()
        sys.exit(1)
    pprint(registry)
