"""Recipe extraction service: FastAPI app (``src.app``) and services (``src.services``)."""
