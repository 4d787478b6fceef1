"""HTTP layer: app factory, routers, schemas and request validation."""
