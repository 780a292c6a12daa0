"""Allow running the solver with `python -m tilescape`."""

from tilescape import main

main()
