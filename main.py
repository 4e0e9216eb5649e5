import argparse
import logging
import sys

from rebalancer.allocation_engine import AllocationEngine
from rebalancer.allocation_report import AllocationReport
from rebalancer.config import DEFAULT_STORE_PATH
from rebalancer.data_loader import PortfolioLoader
from rebalancer.exceptions import RebalancerError
from rebalancer.portfolio_store import PortfolioStore
from rebalancer.portfolio_validator import PortfolioValidator
from rebalancer.simulation import ManualSimulator


def _parse_shares(pairs):
    """``["VTI=3", "BND=10"]`` → ``{"VTI": 3.0, "BND": 10.0}``."""
    counts = {}
    for pair in pairs:
        symbol, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected SYMBOL=SHARES, got {pair!r}")
        counts[symbol.strip().upper()] = float(value)
    return counts


def build_parser():
    parser = argparse.ArgumentParser(
        description="Spread new cash across a portfolio in whole shares.",
    )
    parser.add_argument("portfolio", nargs="?",
                        help="CSV portfolio file (defaults to the saved portfolio)")
    parser.add_argument("--cash", type=float,
                        help="additional investment (defaults to the saved amount)")
    parser.add_argument("--shares", nargs="+", metavar="SYMBOL=N",
                        help="simulate these share counts instead of optimising")
    parser.add_argument("--store", default=DEFAULT_STORE_PATH,
                        help=f"portfolio store file (default: {DEFAULT_STORE_PATH})")
    parser.add_argument("--save", action="store_true",
                        help="save the portfolio and cash amount to the store")
    parser.add_argument("--apply", action="store_true",
                        help="add the purchases to current values and save")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = PortfolioStore(args.store)
    saved = store.load()

    try:
        assets = PortfolioLoader.load_csv(args.portfolio) if args.portfolio else saved.assets
        cash = args.cash if args.cash is not None else saved.additional_investment
        shares = _parse_shares(args.shares) if args.shares else None
    except (OSError, RebalancerError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if not assets:
        print("No assets. Pass a portfolio CSV or save one first.", file=sys.stderr)
        return 1

    exchanges = {a.exchange for a in assets}
    exchange = next(iter(exchanges)) if len(exchanges) == 1 else None

    print(AllocationReport.render_summary(assets, cash, exchange))
    print()

    try:
        if shares is not None:
            report = ManualSimulator.run(assets, shares, cash)
            print(AllocationReport.render_simulation(report, exchange))
            purchases = shares if report.is_valid else None
        else:
            if not PortfolioValidator.validate(assets):
                print("Target allocations must total 100% before optimising.", file=sys.stderr)
                return 1
            results = AllocationEngine.allocate(assets, cash)
            print(AllocationReport.render_allocation(results, cash, exchange))
            purchases = AllocationEngine.share_counts(results)
    except RebalancerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.apply:
        if purchases is None:
            print("Plan is invalid; nothing applied.", file=sys.stderr)
            return 1
        assets = ManualSimulator.apply_purchases(assets, purchases)
        if not store.save(assets, cash):
            print(f"Failed to save portfolio to {store.path}", file=sys.stderr)
            return 1
        print(f"\nApplied purchases and saved to {store.path}")
    elif args.save:
        if not store.save(assets, cash):
            print(f"Failed to save portfolio to {store.path}", file=sys.stderr)
            return 1
        print(f"\nSaved to {store.path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
