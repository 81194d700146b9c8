"""YAML configuration loading and writing."""
