"""Subcommand implementations registered by ``bytestreams.cli.app``."""
