"""Privilege elevation (sudo) shared by all root-requiring steps."""
