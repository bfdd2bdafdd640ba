"""Entry point for `python -m screencomposer`."""
from screencomposer.main import main

main()
