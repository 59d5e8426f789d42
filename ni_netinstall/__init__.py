"""Netinstall package-group loading: sources, fetching, decoding and status."""
