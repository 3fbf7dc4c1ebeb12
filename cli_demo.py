"""Small CLI demo that records a run and prints the checkpoint tables.

It walks through the usual pattern: a slow I/O-like step, a memory heavy
step with a long checkpoint name (to show name truncation), and a loop of
repeated checkpoints that feeds the per-name averages.
"""
from __future__ import annotations

import argparse
import logging
import time

from ministopwatch import OutputMode, create_stopwatch


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Record a few checkpoints and print them")
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Sample process memory at every checkpoint",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Print the HTML tables instead of the text tables",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of repeated loop checkpoints (default: 5)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )

    stopwatch = create_stopwatch(
        enabled=True,
        memory_profiling=args.memory,
        output_mode=OutputMode.MARKUP if args.html else OutputMode.TERMINAL,
    )
    stopwatch.start()

    print("Sleeping 10 ms")
    time.sleep(0.01)
    stopwatch.checkpoint("database_query")

    print("Simulate memory intensive work")
    data = ["A" * 100 for _ in range(10000)]
    stopwatch.checkpoint("data_processing_long_caption_for_checkpoint_name")
    del data

    for i in range(max(0, args.iterations)):
        print(f"Iteration {i}")
        time.sleep(0.001)
        stopwatch.checkpoint("loop_iteration")

    stopwatch.finish()
    logging.info("Total time: %.4f s", stopwatch.get_time())
    print(stopwatch)


if __name__ == "__main__":
    main()
