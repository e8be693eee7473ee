"""Manage and deploy dotfiles by symlinking them from a single dotfolder."""

__version__ = "0.4.0"