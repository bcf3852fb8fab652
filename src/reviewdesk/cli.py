"""Command-line interface for ReviewDesk."""

import argparse
import json
import logging
import sys

from .core.config import settings
from .core.constants import FileConstants, StatusFilter
from .core.errors import ReviewDeskError
from .core.filters import ReviewFilters
from .services.review_service import ReviewService
from .utils.data_prep import export_to_json, prepare_export

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def _filters_from_args(args) -> ReviewFilters:
    return ReviewFilters(
        property=args.property,
        min_rating=args.min_rating,
        status=args.status,
        search=args.search,
    )


def _print_reviews(reviews):
    for review in reviews:
        flags = ("approved" if review.is_approved else "pending") + (", public" if review.is_public else "")
        print(f"[{review.id}] {review.rating:.1f}★ {review.property_name} - {review.guest_name} ({flags})")
        print(f"    {review.comment[:120]}")


def cmd_reviews(service: ReviewService, args):
    """List Hostaway reviews."""
    reviews = service.list_reviews(_filters_from_args(args))
    if args.json:
        print(json.dumps([r.to_dict() for r in reviews], indent=2, ensure_ascii=False))
        return
    print(f"{len(reviews)} reviews")
    _print_reviews(reviews)


def cmd_analytics(service: ReviewService, args):
    """Print dashboard analytics."""
    analytics = service.list_analytics()
    print(json.dumps(analytics.to_dict(), indent=2, ensure_ascii=False))


def cmd_google(service: ReviewService, args):
    """Fetch Google reviews for one property."""
    reviews = service.search_places_reviews(args.property_name, args.address)
    if not reviews:
        print(f"No Google reviews found for '{args.property_name}'")
        return
    print(f"{len(reviews)} Google reviews for '{args.property_name}'")
    _print_reviews(reviews)


def cmd_places(service: ReviewService, args):
    """Search Google Places."""
    places = service.google.search_places(args.query, location=args.location, radius=args.radius)
    for place in places:
        rating = f"{place.rating:.1f}" if place.rating is not None else "-"
        print(f"{place.id}  {rating}  {place.name}, {place.address}")


def cmd_export(service: ReviewService, args):
    """Export filtered reviews and analytics to JSON."""
    filters = _filters_from_args(args)
    reviews = service.list_reviews(filters)
    data = prepare_export(reviews, service.list_analytics(), {
        "property": args.property,
        "rating": args.min_rating,
        "status": args.status,
    })
    export_to_json(data, args.out)
    print(f"Exported {len(reviews)} reviews to {args.out}")


def _add_filter_args(parser):
    parser.add_argument('--property', help='Property id or part of its name')
    parser.add_argument('--min-rating', type=float, help='Minimum rating (1-5)')
    parser.add_argument('--status', choices=StatusFilter.ALL, help='Approval/visibility status')
    parser.add_argument('--search', help='Text to look for in guest, property or comment')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ReviewDesk - Property review management")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    reviews_parser = subparsers.add_parser('reviews', help='List Hostaway reviews')
    _add_filter_args(reviews_parser)
    reviews_parser.add_argument('--json', action='store_true', help='Print reviews as JSON')

    subparsers.add_parser('analytics', help='Show review analytics')

    google_parser = subparsers.add_parser('google', help='Fetch Google reviews for a property')
    google_parser.add_argument('property_name', help='Property name to look up')
    google_parser.add_argument('--address', help='Property address for a closer match')

    places_parser = subparsers.add_parser('places', help='Search Google Places')
    places_parser.add_argument('query', help='Search query')
    places_parser.add_argument('--location', help='"lat,lng" to bias results')
    places_parser.add_argument('--radius', type=int, default=1000, help='Search radius in metres')

    export_parser = subparsers.add_parser('export', help='Export reviews and analytics')
    _add_filter_args(export_parser)
    export_parser.add_argument('--out', required=True, help='Output JSON file')

    return parser


COMMANDS = {
    'reviews': cmd_reviews,
    'analytics': cmd_analytics,
    'google': cmd_google,
    'places': cmd_places,
    'export': cmd_export,
}


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    try:
        COMMANDS[args.command](ReviewService(), args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except ReviewDeskError as e:
        logger.error(f"Command failed: {e.message}")
        if e.details:
            logger.error(e.details)
        sys.exit(1)


if __name__ == "__main__":
    main()
