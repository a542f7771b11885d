"""Adapters that connect the core to the operating system and disk."""
