#!/usr/bin/env python3
"""
E-Invoice XML to PDF Renderer - Main Entry Point.

Converts every electronic invoice XML document (全电发票) in the input
directory into a fixed-layout PDF replica in the output directory. It
provides both a command-line interface and programmatic access to the
batch conversion.

Usage:
    Command Line:
        python main.py
        python main.py --input ./assets/ --output ./output/ --resources ./resources/

    Python:
        from main import run_conversion
        summary = run_conversion("assets/", "output/")

Author: E-Invoice Tooling Team
Version: 1.0.0
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from einvoice_pdf.utils.logger import setup_logger_from_config, get_logger
from einvoice_pdf.utils.exceptions import EInvoiceError


@dataclass
class ConversionSummary:
    """
    Outcome of one batch run.

    Attributes:
        input_dir: Directory that was scanned.
        generated: PDFs written, in processing order.
        failed: (source file, error message) for every failed document.
    """
    input_dir: Path
    generated: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.generated)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    def __str__(self) -> str:
        return f"success: {self.success_count}, failed: {self.failure_count}"


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Electronic invoice XML to PDF renderer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Convert using the directories from config/settings.yaml:
        python main.py

    Convert a specific directory:
        python main.py --input ./assets/ --output ./output/
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Directory containing invoice XML files (default: paths.input_dir)"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Directory receiving the PDFs (default: paths.output_dir)"
    )

    parser.add_argument(
        "--resources", "-r",
        type=str,
        default=None,
        help="Directory holding fonts/ and images/ (default: paths.resources_dir)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)

    if args.debug:
        config.set("logging.level", "DEBUG")
    elif args.quiet:
        config.set("logging.level", "WARNING")

    logger = setup_logger_from_config()

    logger.info("=" * 60)
    logger.info("E-INVOICE XML TO PDF RENDERER")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")

    return config


def run_conversion(
    input_dir: Optional[str] = None,
    output_dir: Optional[str] = None,
    resources_dir: Optional[str] = None,
    config_path: Optional[str] = None
) -> ConversionSummary:
    """
    Convert every invoice XML document in a directory to PDF.

    Startup problems (missing input directory, missing fonts or images)
    raise before any document is processed. Problems with a single
    document are logged and counted, and the batch moves on.

    Args:
        input_dir: Directory of XML documents (default: paths.input_dir).
        output_dir: Directory for PDFs (default: paths.output_dir).
        resources_dir: Fonts and images (default: paths.resources_dir).
        config_path: Optional custom configuration file path.

    Returns:
        ConversionSummary with generated and failed files.

    Raises:
        InputDirectoryNotFoundError: If input_dir does not exist.
        ResourceLoadError: If a font or image cannot be loaded.

    Example:
        >>> summary = run_conversion("assets/", "output/")
        >>> print(summary)
        success: 3, failed: 0
    """
    logger = get_logger(__name__)

    if config_path:
        # A new settings file replaces whatever was loaded before
        ConfigurationManager.reset()
    ConfigurationManager(config_path)

    from einvoice_pdf.input_handler import InputHandler
    from einvoice_pdf.model import load_invoice
    from einvoice_pdf.output_handler import OutputHandler
    from einvoice_pdf.renderer import InvoiceRenderer, ResourceLoader

    input_path = Path(input_dir or get_config("paths.input_dir", "assets"))
    summary = ConversionSummary(input_dir=input_path)

    input_handler = InputHandler()
    input_handler.validate_directory(input_path)
    output_handler = OutputHandler(output_dir)

    files_to_process = input_handler.discover(input_path)
    if not files_to_process:
        logger.warning(f"No invoice XML files found in {input_path}, nothing to convert")
        return summary

    # Fonts and images are loaded once and shared by every document
    context = ResourceLoader(resources_dir).load()
    renderer = InvoiceRenderer(context)

    logger.info(f"Converting {len(files_to_process)} files...")

    for file_path in files_to_process:
        logger.info(f"Processing: {file_path.name}...")

        try:
            target = output_handler.output_path_for(file_path)
            output_handler.discard_stale(target)

            invoice = load_invoice(file_path)
            pdf_bytes = renderer.render(invoice)
            output_handler.write(pdf_bytes, target)

            summary.generated.append(target)
            logger.info(f"  Generated: {target.name}")

        except Exception as e:
            summary.failed.append((file_path, str(e)))
            logger.error(f"  Failed: {file_path.name} - {e}")
            continue

    logger.info(str(summary))
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 once the batch has run, non-zero for startup errors).
    """
    try:
        args = parse_arguments(argv)
        initialize_system(args)
        logger = get_logger(__name__)

        summary = run_conversion(
            input_dir=args.input,
            output_dir=args.output,
            resources_dir=args.resources
        )

        logger.info("=" * 60)
        logger.info(f"Conversion complete. {summary}")
        logger.info("=" * 60)

        return 0

    except EInvoiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if "--debug" in sys.argv:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
