"""Notes API: multi-tenant note storage behind token authentication and role-based access control."""

__version__ = "0.1.0"
