"""Textual scratchpad for trying detectors interactively."""
