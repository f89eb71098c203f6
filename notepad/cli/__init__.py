"""
CLI Module.

Command-line views over the note shell, built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All state changes go through NotesShell
- Storage is whatever storage.yaml (or --backend) selects

Usage:
    python cli.py --help
    python cli.py notes list
    python cli.py notes add "groceries" "eggs, milk"
    python cli.py notes delete 3
    python cli.py tui
"""
