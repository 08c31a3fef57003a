"""Allow running the CLI with `python -m trademark_pipeline`."""

from .cli.main import main

if __name__ == "__main__":
    main()
