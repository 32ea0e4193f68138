from .admin_client import AdminClient

__all__ = ["AdminClient"]
