#!/usr/bin/env python3
"""
CMS Container Entrypoint

Dispatches to the CLI; with no arguments the HTTP server is started.

Modes:
  serve        - Run HTTP server (default)
  create-user  - Seed an editor account
"""

import sys

from cms.cli import main

if __name__ == "__main__":
    sys.exit(main())
