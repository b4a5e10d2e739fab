# -*- coding: utf-8 -*-

"""
Main entry point for running the AppData toolkit from a source checkout.
"""

import sys

from appdata_toolkit.cli import main

if __name__ == '__main__':
    sys.exit(main())
