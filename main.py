#!/usr/bin/env python3
"""
RFC2136 Provider - Main Entry Point

This is the main entry point for the RFC2136 provider CLI.
It can be run directly or imported as a module.
"""

from rfc2136_provider.cli.main import main

if __name__ == "__main__":
    main()
