#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main entry point for running devsweep as a module.
Example: python -m devsweep --dry-run
"""

import sys
from devsweep.cli import main

if __name__ == "__main__":
    sys.exit(main())
