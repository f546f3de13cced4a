"""Infrastructure services used by the application layer."""
