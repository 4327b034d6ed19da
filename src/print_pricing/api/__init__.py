"""API subpackage - FastAPI routes over the pricing engine."""
