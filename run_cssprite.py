import sys

if __name__ == "__main__":
    from cssprite.app.cli import main

    sys.exit(main())
