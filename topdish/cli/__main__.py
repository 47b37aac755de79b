"""Allow ``python -m topdish.cli`` execution; runs the analyze command."""

from topdish.cli.analyze import main

main()
