"""Nix installation and activation."""
