"""Registry download sources."""
