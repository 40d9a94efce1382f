"""Recipe catalog service seeded from a bundled CSV dataset."""
