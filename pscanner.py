#!/usr/bin/env python3
"""
pscanner - Fast TCP port scanner

Dials every port in the requested set concurrently from a bounded
worker pool and reports which ones accepted a connection.

Usage:
    python pscanner.py --host example.com --ports 1-1024
    python pscanner.py --host 10.0.0.5 --ports 22,80,443,8000-8100 --workers 200 --timeout 300
"""

from pscanner.main import run

if __name__ == "__main__":
    run()
