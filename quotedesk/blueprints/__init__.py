"""Application blueprints."""
