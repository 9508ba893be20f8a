"""Default configuration values for mdchunk."""

# 1000 chars is roughly 250 tokens; 150 chars of overlap is 1-2 sentences
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 150
DEFAULT_CHUNKING_MODE = "legacy"

CHUNKING_MODES = ("legacy", "ast")

# Environment variable to field name mapping
ENV_VAR_MAP: dict[str, str] = {
    "mode": "CHUNKING_MODE",
    "chunk_size": "CHUNK_SIZE",
    "chunk_overlap": "CHUNK_OVERLAP",
}

# Top-level key holding chunking settings in a YAML config file
CONFIG_FILE_SECTION = "chunking"
