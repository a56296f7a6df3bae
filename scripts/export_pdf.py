#!/usr/bin/env python3
"""
CLI entry point for exporting a block list to PDF.

Usage:
    python -m scripts.export_pdf blocks.json                        # cv template, default name
    python -m scripts.export_pdf blocks.json --template ats --filename cv-ats.pdf
    python -m scripts.export_pdf blocks.json --output-dir out/
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def main(argv=None):
    parser = argparse.ArgumentParser(description="CV PDF Composer - Export text blocks to PDF")
    parser.add_argument("blocks", type=Path, help="JSON file with a list of PdfTextBlock objects")
    parser.add_argument("--template", choices=["cv", "ats", "letter"], default=None)
    parser.add_argument("--filename", default=None, help="Name of the generated PDF")
    parser.add_argument("--output-dir", type=Path, default=None)
    args = parser.parse_args(argv)

    from config.settings import settings
    from core.pdf_engine import DirectorySink, ExportFailed, PdfExporter, blocks_from_dicts

    try:
        items = json.loads(args.blocks.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read blocks from {args.blocks}: {e}", file=sys.stderr)
        return 2

    try:
        blocks = blocks_from_dicts(items)
    except ValueError as e:
        print(f"Invalid blocks in {args.blocks}: {e}", file=sys.stderr)
        return 2

    sink = DirectorySink(args.output_dir or settings.output_dir)
    exporter = PdfExporter(template=args.template, sink=sink)

    try:
        path = asyncio.run(exporter.export(blocks, args.filename))
    except ExportFailed as e:
        print(f"Export failed: {e}", file=sys.stderr)
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
