"""Table parsing, grid reconstruction and extraction.

Submodules:
  schema     -- Table / Row / Cell Pydantic models
  grid       -- span() and pad() grid reconstruction
  urls       -- URLConverter and table id construction
  extractor  -- TableExtractor orchestrator and extract_tables() entry point
"""
