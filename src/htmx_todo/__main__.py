"""Allow ``python -m htmx_todo``."""

from htmx_todo.interface.cli import main

if __name__ == "__main__":
    main()
