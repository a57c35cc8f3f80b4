"""Site-level metadata derived from the configuration."""
