#!/usr/bin/env python3
"""Compare lossless compression widths for a set of equity price histories.

For each symbol the closing prices are read, converted to integers and
measured raw, delta coded, after the Haar, line and TS wavelet transforms
and as a wavelet packet best basis.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from liftpack.config import load_config
from liftpack.data.yahoo import YahooSeries
from liftpack.eval import compare_compression
from liftpack.systems.cost import make_cost
from liftpack.systems.quantize import decimal_to_int, round_to_int


def main() -> None:
    parser = argparse.ArgumentParser(description="Lossless compression comparison.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to liftpack.toml (defaults to ./liftpack.toml or ~/liftpack.toml)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory of price history files (overrides the config)",
    )
    parser.add_argument(
        "symbols",
        nargs="*",
        help="Symbols to compare (default: the configured list)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = load_config(args.config)
    exp = config.experiment
    series = YahooSeries(args.data_dir or exp.data_dir)
    quantize = round_to_int if exp.quantizer == "round3" else decimal_to_int
    cost = make_cost(config.packet.cost, config.packet.threshold)

    print(f"{'Equity':>6} {'raw':>7} {'delta':>7} {'Haar':>7} {'line':>7} {'TS':>7} {'packet':>7}")
    for symbol in args.symbols or exp.symbols:
        prices = series.load(symbol, exp.field, exp.samples)
        if prices is None:
            break
        if prices.shape[0] != exp.samples:
            print(f"Error: {prices.shape[0]} out of {exp.samples} data elements read")
            break
        report = compare_compression(
            quantize(prices),
            name=symbol,
            packet_wavelet=config.packet.wavelet,
            cost=cost,
            arena_block_bytes=config.packet.arena_block_bytes,
        )
        print(report.row())
        if not report.basis_valid:
            print(f"  {symbol}: best basis calculation failed")
        for method, ok in report.lossless.items():
            if not ok:
                print(f"  {symbol}: {method} inverse is wrong")


if __name__ == "__main__":
    main()
