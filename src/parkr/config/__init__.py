"""Configuration package: locations, persisted config and derived settings."""
