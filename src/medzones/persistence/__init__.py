"""Zone, doctor and assignment storage adapters."""
