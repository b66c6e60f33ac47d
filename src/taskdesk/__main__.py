"""Allow ``python -m taskdesk``."""

from taskdesk.cli import main

main()
