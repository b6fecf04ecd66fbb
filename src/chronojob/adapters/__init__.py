"""Adapters – third-party backends for the scheduler's ports."""
