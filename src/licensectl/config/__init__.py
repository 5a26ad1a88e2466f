"""Configuration — settings models, ``licensectl.toml`` discovery, logging."""
