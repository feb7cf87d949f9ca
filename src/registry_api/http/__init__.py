"""HTTP helpers shared by the registry API routers."""

from .errors import error_payload, install_exception_handlers

__all__ = ["error_payload", "install_exception_handlers"]
