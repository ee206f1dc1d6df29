"""Dev fixture seeding (python -m seed)."""
