"""Domain helpers independent from FastAPI and the storage engine."""
