"""Shared helpers for netinstall-groups: errors, logging, environment, storage."""
