#!/usr/bin/env python3
"""Simple performance baseline for RenderGuard candidate filtering."""

from __future__ import annotations

import argparse
import json
import random
import time
from typing import Dict, List

from renderguard.character_groups import (
    KANA_EXTENDED_A_14_0,
    KANA_SUPPLEMENT_6_0,
    KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0,
    CapabilityRequest,
)
from renderguard.normalize import ALL, VENDOR_SUBSTITUTIONS
from renderguard.pipeline import EnvironmentalFilter
from renderguard.types import Segments


_PLAIN_CANDIDATES = [
    "京都",
    "今日と",
    "きょうと",
    "キョウト",
    "kyouto",
    "強度",
    "〜",
]

_RESTRICTED_CANDIDATES = [
    "\U0001B001",
    "\U0001B002",
    "\U0001B122",
    "a\tb",
    "a\nb",
]

_CAPABILITY_SETS = {
    "baseline": CapabilityRequest(),
    "kana_6_0": CapabilityRequest.from_groups([KANA_SUPPLEMENT_6_0]),
    "kana_all": CapabilityRequest.from_groups(
        [KANA_SUPPLEMENT_6_0, KANA_SUPPLEMENT_AND_KANA_EXTENDED_A_10_0, KANA_EXTENDED_A_14_0]
    ),
}


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _build_segments(segment_count: int, candidates: int, restrict_every: int) -> Segments:
    segments = Segments()
    for i in range(segment_count):
        segment = segments.add_segment(key=f"seg{i}")
        for j in range(candidates):
            if restrict_every and j % restrict_every == 0:
                segment.add_candidate(random.choice(_RESTRICTED_CANDIDATES))
            else:
                segment.add_candidate(random.choice(_PLAIN_CANDIDATES))
    return segments


def _run_case(
    args: argparse.Namespace, capabilities: CapabilityRequest, runs: int
) -> Dict[str, float]:
    environmental_filter = EnvironmentalFilter(default_rules=VENDOR_SUBSTITUTIONS)
    environmental_filter.set_normalization_policy(ALL)
    durations: List[float] = []
    for _ in range(runs):
        segments = _build_segments(args.segments, args.candidates, args.restrict_every)
        start = time.perf_counter()
        environmental_filter.rewrite(capabilities, segments)
        durations.append(time.perf_counter() - start)
    durations.sort()
    return {
        "min_ms": durations[0] * 1000.0,
        "p50_ms": durations[len(durations) // 2] * 1000.0,
        "max_ms": durations[-1] * 1000.0,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="RenderGuard filter perf baseline.")
    parser.add_argument("--segments", type=_positive_int, default=20)
    parser.add_argument("--candidates", type=_positive_int, default=500)
    parser.add_argument("--runs", type=_positive_int, default=5)
    parser.add_argument("--restrict-every", type=int, default=10)
    parser.add_argument(
        "--output",
        type=str,
        default="",
        help="Optional path to write results as JSON.",
    )
    args = parser.parse_args()

    print("RenderGuard perf baseline")
    print(
        f"segments={args.segments}, candidates={args.candidates}, "
        f"runs={args.runs}, restrict_every={args.restrict_every}"
    )

    results: Dict[str, Dict[str, float]] = {}
    for name, capabilities in _CAPABILITY_SETS.items():
        stats = _run_case(args, capabilities, args.runs)
        results[name] = stats
        print(
            f"  capabilities={name} min={stats['min_ms']:.2f}ms "
            f"p50={stats['p50_ms']:.2f}ms max={stats['max_ms']:.2f}ms"
        )
    if args.output:
        output_path = args.output
        with open(output_path, "w", encoding="utf-8") as handle:
            json.dump(
                {
                    "segments": args.segments,
                    "candidates": args.candidates,
                    "runs": args.runs,
                    "restrict_every": args.restrict_every,
                    "results": results,
                },
                handle,
                indent=2,
                sort_keys=True,
            )
        print(f"\nWrote results to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
