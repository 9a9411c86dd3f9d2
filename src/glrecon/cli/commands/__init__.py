"""CLI commands for glrecon."""
