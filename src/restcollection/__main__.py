"""Entry point for 'python -m restcollection' command."""

from restcollection.cli import main

if __name__ == "__main__":
    main()
