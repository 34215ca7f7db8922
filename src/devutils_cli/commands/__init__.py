"""Subcommands of the ``dev`` CLI, one module per command."""
