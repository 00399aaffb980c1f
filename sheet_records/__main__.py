"""Package entry point for ``python -m sheet_records``.

HOW: Delegates to the CLI's main() function.
"""

from sheet_records.cli import main

if __name__ == "__main__":
    main()
