"""Terminal interface for Omingard."""
