"""Configuration loading and defaults for mdchunk.

Main components:
- load_chunking_config: Resolve CLI flags, YAML file, environment and defaults
- defaults: Built-in chunk size, overlap and mode values

Import from ``mdchunk.config.loader`` directly; this package module stays
import-free so that ``mdchunk.models`` can depend on ``mdchunk.config.defaults``.
"""
