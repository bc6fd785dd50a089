"""Quasicrystal generation packages."""
