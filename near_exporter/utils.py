#!/usr/bin/env python3
"""
Utility Functions
"""

import sys
import logging


def setup_logging(level=logging.INFO):
    """Set up logging configuration to stderr only"""
    logging.basicConfig(
        level=level, 
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
