"""Trade enrichment."""
