"""Native package manager backends (apt, dnf, brew)."""
