"""Configuration package: TOML config, derived settings and path policy."""
