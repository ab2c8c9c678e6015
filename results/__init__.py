"""Academic results aggregation and classification engine (Django app)."""
