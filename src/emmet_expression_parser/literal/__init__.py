"""Node literal matching for shorthand expression parsing.

Key Components:
    NodeLiteralScanner: State-machine scanner turning one literal into a node
    ScannerState: States of the scanner
    match_literal: Scan with the lazily created process-wide scanner
"""

from .scanner import (
    NodeLiteralScanner,
    ScannerState,
    default_scanner,
    match_literal,
)

__all__ = [
    "NodeLiteralScanner",
    "ScannerState",
    "default_scanner",
    "match_literal",
]
