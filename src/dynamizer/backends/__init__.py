"""Backends for dynamizer output generation (loader code)."""

from .loader import render_loader_code, save_loader_file, write_loader_code

__all__ = ["render_loader_code", "save_loader_file", "write_loader_code"]
