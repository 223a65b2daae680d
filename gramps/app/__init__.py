"""FastAPI application for serving composed data sources."""
