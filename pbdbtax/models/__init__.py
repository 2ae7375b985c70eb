"""Data models for pbdbtax."""
