"""Allow ``python -m wasteflow``."""

from wasteflow.cli.main import main

main()
