"""Textual screens and widgets for git-tidy."""
