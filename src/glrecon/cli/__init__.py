"""CLI interface for glrecon."""
