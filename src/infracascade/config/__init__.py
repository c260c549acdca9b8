"""Configuration: settings, TOML discovery and logging."""
