import argparse
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from core.call_log import CallLog  # noqa: E402
from utils.trace_utils import write_call_log  # noqa: E402
from kv_store import KeyValueStore, StaleKeyValueStore  # noqa: E402


def generate_calls(total_calls: int, keys: int, faulty: bool = False, seed=None) -> CallLog:
    # Drives a real store with random operations and records every call.
    # Roughly half the calls are reads so that most get() calls have
    # interesting history behind them.
    rng = random.Random(seed)
    store = StaleKeyValueStore() if faulty else KeyValueStore()
    key_names = [f"k{i}" for i in range(keys)]
    log = CallLog()

    for _ in range(total_calls):
        key = rng.choice(key_names)
        roll = rng.random()

        if roll < 0.35:
            value = rng.randint(0, 99)
            log.append("set", (key, value), store.set(key, value))
        elif roll < 0.5:
            log.append("del", (key,), getattr(store, "del")(key))
        else:
            log.append("get", (key,), store.get(key))

    return log


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Generate a randomized call log for the key-value store behaviours "
        "(experiments/key_value_store/kv_store.spec)."
    )
    parser.add_argument(
        "-s",
        "--size",
        type=int,
        required=True,
        help="Total number of calls to generate.",
    )
    parser.add_argument(
        "-k",
        "--keys",
        type=int,
        default=3,
        help="Number of distinct keys to draw from (default: 3).",
    )
    parser.add_argument(
        "--faulty",
        action="store_true",
        help="Record a store whose set() never overwrites, so get() behaviours fail.",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible logs.")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        required=True,
        help="Path to the output CSV file.",
    )
    args = parser.parse_args()

    if args.size <= 0 or args.keys <= 0:
        parser.error("--size and --keys must be positive")

    calls = generate_calls(args.size, args.keys, faulty=args.faulty, seed=args.seed)
    kind = "faulty" if args.faulty else "correct"
    written = write_call_log(args.output, calls, header_comment=f"{kind} key-value store, {len(calls)} calls")
    print(f"Call log with {written} calls successfully written to {args.output}")
