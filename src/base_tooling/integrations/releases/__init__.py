"""Release-hosting API (GitHub releases)."""
