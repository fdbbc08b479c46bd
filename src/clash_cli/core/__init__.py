"""Core components of the Clash control client.

This package contains:
- The runtime configuration object
- The HTTP client for the external controller API
- Configuration file discovery
- Tolerant views over API responses
- Exception handling

The command-line layer only formats what these components return.
"""
