"""Feature modules for lean-identity."""
