#!/usr/bin/env python3
"""
Constellix Client - Main Entry Point

This is the main entry point for the Constellix client CLI.
It can be run directly or imported as a module.
"""

from constellix_client.cli.main import main

if __name__ == "__main__":
    main()
