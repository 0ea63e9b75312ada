"""Trade loading and CSV export."""
