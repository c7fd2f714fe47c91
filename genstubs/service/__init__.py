"""Optional HTTP service mode (requires the ``service`` extra)."""
