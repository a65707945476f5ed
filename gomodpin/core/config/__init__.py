"""Configuration loading for gomodpin."""
