"""glrecon - general ledger upload and re-upload reconciliation."""

__version__ = "0.1.0"


def __getattr__(name):
    # The CLI pulls in click and the database layer, so load it on demand
    if name == "main":
        from glrecon.cli.main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
