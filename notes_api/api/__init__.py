"""HTTP layer: routers, error translation and request middleware."""
