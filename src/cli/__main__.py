"""Allow ``python -m src.cli`` execution."""

from src.cli.set_webhook import main

main()
