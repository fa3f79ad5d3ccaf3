# main.py

"""Entry point for the promo_cards command-line tool."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.card import ImageFormat, Template

logger = logging.getLogger("promo_cards.main")


def _csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    templates = ", ".join(t.value for t in Template)

    parser = argparse.ArgumentParser(
        prog="promo_cards",
        description="Promotional card generator for Shopee affiliate offers.",
        epilog=f"Available templates: {templates}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show INFO-level log messages on stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    best = sub.add_parser("best-sellers", help="List top-selling offers.")
    best.add_argument(
        "-n", "--limit", type=int, default=Settings.SHOPEE_PAGE_LIMIT,
        help="Number of products (default: %(default)s).",
    )
    best.add_argument(
        "-f", "--format", choices=["json", "table"], default="table",
        dest="output_format", help="Output format (default: table).",
    )
    best.add_argument(
        "--save", action="store_true", default=False,
        help="Also save the listing as JSON under output/.",
    )

    gen = sub.add_parser("generate", help="Render cards for products.")
    source = gen.add_mutually_exclusive_group(required=True)
    source.add_argument("--item-id", default=None, help="Shopee item id.")
    source.add_argument(
        "--file", default=None, dest="product_file",
        help="JSON file with one product record or a list of them.",
    )
    gen.add_argument(
        "-t", "--templates", type=_csv,
        default=list(Settings.DEFAULT_TEMPLATES),
        help="Comma-separated templates (default: modern,elegant).",
    )
    gen.add_argument(
        "--formats", type=_csv,
        default=[f.value for f in ImageFormat],
        help="Comma-separated formats: png, jpeg (default: both).",
    )
    gen.add_argument("--description", default="", help="Use this text as-is.")
    gen.add_argument(
        "--no-ai", action="store_true", default=False,
        help="Skip Gemini and use the template description.",
    )
    gen.add_argument(
        "--light", action="store_true", default=False,
        help="Light backgrounds instead of dark.",
    )
    gen.add_argument(
        "--flat", action="store_true", default=False,
        help="Solid background instead of a gradient.",
    )
    gen.add_argument("--primary", default=None, help="Override primary colour.")
    gen.add_argument("--accent", default=None, help="Override accent colour.")
    gen.add_argument(
        "--background", default=None, help="Override background colour."
    )
    gen.add_argument(
        "--show-shop", action="store_true", default=False,
        help="Include the shop name on the card.",
    )
    gen.add_argument(
        "--cache", action="store_true", default=False,
        help="Reuse AI descriptions cached on disk under cache/.",
    )
    gen.add_argument(
        "-o", "--output", default=None, dest="output_dir",
        help="Custom output directory (default: output/).",
    )

    desc = sub.add_parser("describe", help="Print product descriptions.")
    desc.add_argument("product_file", help="JSON product file.")
    desc.add_argument(
        "--no-ai", action="store_true", default=False,
        help="Skip Gemini and use the template description.",
    )
    desc.add_argument(
        "--cache", action="store_true", default=False,
        help="Reuse AI descriptions cached on disk under cache/.",
    )
    return parser


def _validate_choices(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject unknown template/format names before any work starts."""
    valid_templates = {t.value for t in Template}
    unknown = [t for t in args.templates if t not in valid_templates]
    if unknown:
        parser.error(f"unknown template(s): {', '.join(unknown)}")
    valid_formats = {f.value for f in ImageFormat}
    unknown = [f for f in args.formats if f not in valid_formats]
    if unknown:
        parser.error(f"unknown format(s): {', '.join(unknown)}")


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    from src.cli.runner import run_generate
    from src.services.card_service import CardGenerationOptions

    _validate_choices(parser, args)
    custom_colors = {
        key: value
        for key, value in (
            ("primary", args.primary),
            ("accent", args.accent),
            ("background", args.background),
        )
        if value
    }
    options = CardGenerationOptions(
        use_ai=not args.no_ai,
        custom_description=args.description,
        templates=args.templates,
        formats=args.formats,
        use_gradient=not args.flat,
        custom_colors=custom_colors,
        dark_mode=not args.light,
        show_shop_name=args.show_shop,
    )
    return run_generate(
        args.item_id, args.product_file, options, args.output_dir, args.cache
    )


def main() -> None:
    """Parse arguments and dispatch to the selected command."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(verbose=args.verbose)
    logger.info("promo_cards starting (%s), log file: %s", args.command, log_file)

    try:
        if args.command == "best-sellers":
            from src.cli.runner import run_best_sellers

            exit_code = run_best_sellers(
                args.limit, args.output_format, args.save
            )
        elif args.command == "generate":
            exit_code = _run_generate(parser, args)
        else:
            from src.cli.runner import run_describe

            exit_code = run_describe(
                args.product_file, use_ai=not args.no_ai, cache=args.cache
            )
    except Exception:
        logger.critical("Fatal error during %s", args.command, exc_info=True)
        raise
    finally:
        logger.info("promo_cards shutting down")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
