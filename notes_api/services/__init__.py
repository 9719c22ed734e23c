"""Service layer: authentication flow, authorization policy and resource operations."""
