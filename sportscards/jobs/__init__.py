"""Background jobs for SportsCards."""
