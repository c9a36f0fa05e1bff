"""Entry points wiring the application to its users."""
