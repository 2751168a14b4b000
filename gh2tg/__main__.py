"""Run the relay with ``python -m gh2tg``."""

from gh2tg.app import main

main()
