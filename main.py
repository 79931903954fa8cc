#!/usr/bin/env python3
"""SUBSIFT main entry point.

Usage::

    python main.py -d example.com -o output/example.txt
    python main.py -d example.com -o subs.txt --normalize-all
    python main.py --version
"""

from subsift.cli import main

if __name__ == "__main__":
    main()
