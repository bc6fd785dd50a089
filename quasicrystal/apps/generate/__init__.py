"""Quasicrystal generation CLI."""

from .main import main, load_config, run

__all__ = ['main', 'load_config', 'run']
