"""Allow running as `python -m runtests`."""

from .cli import main

main(prog_name="runtests")
