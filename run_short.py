#!/usr/bin/env python3
"""
Main CLI entrypoint for the Faceless Video Factory.

This is a convenience wrapper that imports and runs the short video pipeline.
"""

import sys

from faceless_video.pipelines.create_short import main

if __name__ == "__main__":
    sys.exit(main())
