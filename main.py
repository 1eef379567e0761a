"""
Bitting List Demo

Generates a master-key bitting list from a JSON configuration file (or a
built-in sample) and prints it as a tree or as the JSON results payload.

Usage:
    python main.py                        # sample configs, tree view
    python main.py configs.json --json    # JSON results
    python main.py --random --levels 2    # random criteria, top of the tree only
"""

import argparse
import json
import sys
from pathlib import Path

from masterkey import MasterKeyError, configure_logging
from masterkey.gateway import create_gateway
from masterkey.services import create_service_provider
from masterkey.trees import create_navigator

SAMPLE_CONFIGS = {
    "masterCuts": "623578",
    "progressionSteps": ["081956", "265790", "447312"],
    "progressionSequence": "413625",
    "startingDepth": 0,
    "macs": 7,
}

SAMPLE_RANDOM_CONFIGS = {
    "cutCount": 5,
    "depthCount": 10,
    "startingDepth": 0,
    "doubleStepProgression": True,
    "macs": 4,
    "seed": 1234,
}


def demo_tree(configs: str, levels: int | None) -> None:
    """Generate through the provider and print the navigator's tree view."""
    provider = create_service_provider()
    service = provider.find_service_for_configs(configs)
    results = service.generate_bitting_list(configs)

    navigator = create_navigator(results.bitting_list)
    print(f"=== {results.source} ===\n")
    print(navigator.render(max_level=levels))
    print()
    print(f"Change keys: {len(navigator.keys)}")
    print(f"MACS violations: {len(navigator.macs_violations())}")


def demo_json(configs: str) -> None:
    """Run the request through the gateway and print the JSON payload."""
    gateway = create_gateway()
    print(gateway.handle_request(configs, indent=2))


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a master-key bitting list")
    parser.add_argument("configs", nargs="?", help="JSON configuration file")
    parser.add_argument("--random", action="store_true", help="Use the sample random configuration")
    parser.add_argument("--json", action="store_true", help="Print the JSON results payload")
    parser.add_argument("--levels", type=int, help="Only render this many tree levels")
    parser.add_argument("--log-level", help="Logging level (default from MASTERKEY_LOG_LEVEL)")
    args = parser.parse_args()

    configure_logging(args.log_level)

    if args.configs:
        configs = Path(args.configs).read_text()
    else:
        configs = json.dumps(SAMPLE_RANDOM_CONFIGS if args.random else SAMPLE_CONFIGS)

    try:
        if args.json:
            demo_json(configs)
        else:
            demo_tree(configs, args.levels)
    except MasterKeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
