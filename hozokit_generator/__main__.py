"""Allow ``python -m hozokit_generator``."""

from hozokit_generator.cli import main

main()
