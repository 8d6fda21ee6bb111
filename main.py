import argparse
import sys

import utils.display as display
from configuration import LEVELS_THRESHOLD_PERCENT
from logger import get_logger
from services import MarketDataService
from sr_levels import analyze_levels

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Support and resistance levels from pivots, Fibonacci, MA and round numbers"
    )
    parser.add_argument("symbols", nargs="*", help="Tickers to analyze (e.g. AAPL PTT.BK BTC-USD)")
    parser.add_argument(
        "--threshold", type=float, default=LEVELS_THRESHOLD_PERCENT,
        help=f"Cluster tolerance in percent of price (default: {LEVELS_THRESHOLD_PERCENT})",
    )
    parser.add_argument(
        "--historical-ma", action="store_true",
        help="Use real moving averages from the fetched closes",
    )
    parser.add_argument("--search", metavar="QUERY", help="Search symbols by name")
    parser.add_argument("--world", action="store_true", help="Show world market indices")
    parser.add_argument(
        "--levels", nargs=4, type=float, metavar=("HIGH", "LOW", "CLOSE", "PRICE"),
        help="Compute levels offline from a price window",
    )
    return parser


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    if args.levels:
        high, low, close, price = args.levels
        result = analyze_levels(high, low, close, price, args.threshold)
        if result.is_fallback:
            logger.warning(f"Basic levels used: {result.error}")
        display.print_status(display.format_levels(result.levels, price, "USD"))
        return 0

    service = MarketDataService(
        threshold_percent=args.threshold, use_historical_ma=args.historical_ma
    )

    if args.search:
        display.print_status(
            display.format_search_results(args.search, service.search(args.search))
        )
        return 0

    if args.world:
        display.print_status(display.format_world_indices(service.get_world_indices()))
        return 0

    if not args.symbols:
        _build_parser().print_help()
        return 2

    exit_code = 0
    for symbol in args.symbols:
        snapshot = service.get_snapshot(symbol)
        if snapshot is None:
            display.print_error(
                f"No data for '{symbol.upper()}'. Check the ticker "
                f"(Thai stocks need .BK, e.g. PTT.BK) or use --search"
            )
            exit_code = 1
            continue
        display.print_status(display.format_snapshot(snapshot))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
