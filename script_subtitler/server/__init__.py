"""HTTP service for editor panels (FastAPI app and pydantic models)."""
