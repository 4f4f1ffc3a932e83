"""Repository-level `cratectl.toml` configuration."""
