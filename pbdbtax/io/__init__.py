"""File readers and writers for pbdbtax."""
