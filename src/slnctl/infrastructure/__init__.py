"""Infrastructure layer — solution file I/O and filesystem lookups."""
