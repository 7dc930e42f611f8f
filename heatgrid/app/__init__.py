"""Application adapters (command line)."""
