"""Allow ``python -m partialsum``."""

from partialsum.api.cli.main import main

if __name__ == "__main__":
    main()
