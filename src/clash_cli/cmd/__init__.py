"""Command line interface modules.

This package provides the ``clash-cli`` commands for:
- Listing and switching configuration files
- Inspecting and changing the routing mode
- Listing proxy groups and changing their selection
- Measuring proxy latency through the daemon

Each command is a thin layer over :mod:`clash_cli.core`, which does the
actual filesystem and HTTP work.
"""
