"""bytestreams CLI — Typer-based command-line interface.

Provides the ``bytestreams`` command with subcommands for copying between
files, standard streams and subprocesses, listing line records, and
showing the effective settings.

Output is rendered with Rich.  Commands that move data print their
summaries to stderr so stdout stays clean for the data itself.
"""
