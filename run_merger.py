"""
run_merger.py: CLI Entry Point

This script serves as the command-line interface entry point for the
Art Split Merger project. It forwards execution to the CLI logic
defined in `src/art_split_merger/cli.py`.

Usage:
    python run_merger.py left.png right.png --out merged.png [options]

This wrapper allows you to run the tool directly without needing to
modify PYTHONPATH or install the project as a package.

For help on available options, run:
    python run_merger.py --help
"""
import sys
# Source code in src/ subdirectory
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import art_split_merger.cli as asm_cli

if __name__ == "__main__":
    asm_cli.run()
