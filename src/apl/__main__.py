"""Allow ``python -m apl``."""

from apl.cli import main

if __name__ == "__main__":
    main()
