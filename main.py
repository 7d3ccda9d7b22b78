# main.py
"""
Main entry point for the particle network background.

Usage: python main.py [config.json]
"""
import sys

from particle_network import main

if __name__ == "__main__":
    main(*sys.argv[1:2])
