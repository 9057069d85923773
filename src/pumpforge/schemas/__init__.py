"""JSON schemas bundled with pumpforge."""
