"""Configuration: settings and the dependency injection container."""
