"""Core resolution and auditing for pbdbtax."""
