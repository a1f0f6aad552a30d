"""Entry point for running the layout server as a module.

Usage:
    python -m family_layout --tree-file /path/to/family_tree.json
    family-layout --tree-file /path/to/family_tree.json --dump
"""

import argparse
import json
import os


def main():
    """Main entry point for the family tree layout server."""
    parser = argparse.ArgumentParser(
        description="Family Tree Layout Server - compute genealogy layouts via MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  family-layout --tree-file ~/family_tree.json
  family-layout -f ~/tree.ged --hidden @I7@,@I9@ --dump

Environment variables:
  FAMILY_TREE_FILE      Path to dataset (.json or .ged)
  FAMILY_TREE_HIDDEN    Comma-separated person IDs to hide
  LAYOUT_PERSON_WIDTH, LAYOUT_PERSON_HEIGHT, LAYOUT_COUPLE_GAP,
  LAYOUT_SIBLING_GAP, LAYOUT_FAMILY_GAP, LAYOUT_GENERATION_GAP,
  LAYOUT_PADDING, LAYOUT_STUB_LENGTH
                        Layout distances
""",
    )
    parser.add_argument(
        "--tree-file",
        "-f",
        metavar="PATH",
        help="Path to family tree dataset (or set FAMILY_TREE_FILE env var)",
    )
    parser.add_argument(
        "--hidden",
        metavar="IDS",
        help="Comma-separated person IDs to hide (or set FAMILY_TREE_HIDDEN)",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the computed layout as JSON and exit instead of serving MCP",
    )
    args = parser.parse_args()

    # CLI args override env vars
    if args.tree_file:
        os.environ["FAMILY_TREE_FILE"] = args.tree_file
    if args.hidden:
        os.environ["FAMILY_TREE_HIDDEN"] = args.hidden

    # Import and initialize AFTER setting env vars
    from . import initialize, mcp

    initialize()

    if args.dump:
        from .core import _get_layout

        print(json.dumps(_get_layout(), indent=2))
        return

    mcp.run()


if __name__ == "__main__":
    main()
