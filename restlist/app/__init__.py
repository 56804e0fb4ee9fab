"""restlist FastAPI application."""
