"""gridmeasures/deployment/server — FastAPI service."""
