# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for exifdir

Reads image files, decodes their Exif directory tree and prints it as
text or JSON.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from exifdir import __version__
from exifdir.core import decode
from exifdir.exceptions import ExifDirError
from exifdir.exif_tags import tag_name
from exifdir.ifd_walker import ExifDocument
from exifdir.instrumentation import logging_trace_hook
from exifdir.options import DecodeOptions
from exifdir.value_types import RATIONAL_TYPES, ResolvedValue, type_name

logger = logging.getLogger(__name__)


def _json_value(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, tuple):
        return [_json_value(v) for v in value]
    return value


def _text_value(value: ResolvedValue) -> str:
    decoded = value.values()
    if isinstance(decoded, bytes):
        if len(decoded) > 32:
            return f"(Binary data {len(decoded)} bytes)"
        return decoded.hex(' ')
    if isinstance(decoded, str):
        return decoded
    if value.type_code in RATIONAL_TYPES:
        return ' '.join(f"{num}/{den}" for num, den in decoded)
    return ' '.join(str(v) for v in decoded)


def document_to_dict(document: ExifDocument) -> Dict[str, Any]:
    """
    Convert a document into JSON-serializable data.

    Args:
        document: Decoded document

    Returns:
        Dictionary with byte order, directories (entries in on-disk order)
        and any errors recorded in tolerant mode
    """
    result: Dict[str, Any] = {
        'byte_order': document.byte_order.label,
        'directories': {},
    }
    for name, directory in document.directories():
        result['directories'][name] = {
            'offset': directory.offset,
            'next_offset': directory.next_offset,
            'entries': [
                {
                    'tag': entry.tag,
                    'name': tag_name(entry.tag, name),
                    'type': type_name(entry.type_code),
                    'count': entry.count,
                    'value': _json_value(entry.value.values()),
                }
                for entry in directory
            ],
        }
    if document.errors:
        result['errors'] = [str(error) for error in document.errors]
    return result


def format_output(document: ExifDocument, format_type: str = "text") -> str:
    """
    Format a decoded document.

    Args:
        document: Decoded document
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(document_to_dict(document), indent=2, ensure_ascii=False)

    lines = [f"ExifByteOrder: {document.byte_order.label}"]
    for name, directory in document.directories():
        for entry in directory:
            lines.append(
                f"{name}:{tag_name(entry.tag, name)}: {_text_value(entry.value)}"
            )
    for error in document.errors:
        lines.append(f"Warning: {error}")
    return "\n".join(lines)


def read_document(file_path: Path, options: DecodeOptions) -> ExifDocument:
    """Read ``file_path`` and decode its Exif directory tree."""
    with open(file_path, 'rb') as f:
        data = f.read()
    return decode(data, options)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='exifdir',
        description="exifdir - Decode the Exif directory tree of JPEG and TIFF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List all entries
  exifdir image.jpg

  # JSON output, keep going past broken sub-directories
  exifdir -j --tolerant image.jpg

  # Save the IFD1 thumbnail
  exifdir --thumbnail thumb.jpg image.jpg
        """
    )
    parser.add_argument('files', nargs='+', help='File(s) to process')
    parser.add_argument('-j', '--json', action='store_true', help='Output in JSON format')
    parser.add_argument('--tolerant', action='store_true',
                        help='Report broken sub-directories instead of failing')
    parser.add_argument('--interop-in-exif', action='store_true',
                        help='Follow an Interoperability pointer stored in the Exif IFD')
    parser.add_argument('--no-thumbnail-ifd', action='store_true',
                        help='Do not follow the IFD1 link')
    parser.add_argument('--thumbnail', type=str,
                        help='Write the IFD1 JPEG thumbnail to this path (single file only)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Verbose output (-vv traces every entry)')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        0 if every file decoded, 1 otherwise
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    if args.thumbnail and len(args.files) > 1:
        parser.error('--thumbnail requires exactly one file')

    options = DecodeOptions(
        tolerant=args.tolerant,
        trace=logging_trace_hook if args.verbose >= 2 else None,
        follow_thumbnail=not args.no_thumbnail_ifd,
        follow_interoperability_in_exif=args.interop_in_exif,
    )
    format_type = "json" if args.json else "text"

    status = 0
    for file_name in args.files:
        file_path = Path(file_name)
        logger.info("Decoding %s", file_path)
        try:
            document = read_document(file_path, options)
        except (ExifDirError, OSError) as e:
            print(f"Error: {file_path}: {e}", file=sys.stderr)
            status = 1
            continue

        if len(args.files) > 1:
            print(f"======== {file_path}")
        print(format_output(document, format_type))

        if args.thumbnail:
            try:
                thumbnail = document.thumbnail_bytes()
            except ExifDirError as e:
                print(f"Error: {file_path}: {e}", file=sys.stderr)
                status = 1
                continue
            if thumbnail is None:
                print(f"Error: {file_path}: no IFD1 thumbnail", file=sys.stderr)
                status = 1
                continue
            Path(args.thumbnail).write_bytes(thumbnail)
            logger.info("Wrote %d byte thumbnail to %s", len(thumbnail), args.thumbnail)

    return status


if __name__ == "__main__":
    sys.exit(main())
