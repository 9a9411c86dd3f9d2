"""Domain layer for glrecon application."""

# Services are imported lazily: the database layer imports
# glrecon.domain.entities, and the services import the database layer.
_SERVICES = {
    "ClientService": "glrecon.domain.client",
    "UserService": "glrecon.domain.user",
    "LedgerService": "glrecon.domain.ledger",
    "GLUploadService": "glrecon.domain.gl_upload",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
