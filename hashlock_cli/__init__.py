"""
Hashlock CLI

Command-line interface for building hash-locked maker orders.

Usage:
    python -m hashlock_cli hashlock "<secret>"
    python -m hashlock_cli order encode --token T --amount A --maker M --secret S
    python -m hashlock_cli order decode <msg>
"""

__version__ = "0.1.0"
