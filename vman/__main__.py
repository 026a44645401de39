#!/usr/bin/env python3
"""
Entry point for running vman as a module.
"""

import sys

from vman import main

if __name__ == '__main__':
    sys.exit(main())
