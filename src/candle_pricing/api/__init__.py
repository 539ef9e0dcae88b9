"""API subpackage - local FastAPI surface over the calculator."""
