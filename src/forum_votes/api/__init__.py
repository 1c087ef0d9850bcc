"""HTTP API for the voting core."""
