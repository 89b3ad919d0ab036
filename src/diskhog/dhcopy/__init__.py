"""Directory listing and byte-for-byte copying."""
