"""Core pipeline — models, services, and use cases. No click dependency."""
