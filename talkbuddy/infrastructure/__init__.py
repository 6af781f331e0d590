"""Infrastructure layer: persistence, HTTP clients and the FastAPI surface."""
