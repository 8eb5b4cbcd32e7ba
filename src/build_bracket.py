#!/usr/bin/env python3
"""
Build a single elimination bracket from a roster file.

Usage:
    python src/build_bracket.py data/roster.yaml
    python src/build_bracket.py data/roster.yaml --settings data/settings.yaml --json

The roster is YAML (or JSON): a list of {id, name, seed} entries, or a
mapping with a 'competitors' list.

Exit codes:
    0: Success
    1: Roster could not be read
"""
import argparse
import json
import sys

import yaml

from bracket.display import get_bracket_display, render_bracket
from bracket.elimination import build_bracket
from bracket.errors import RosterError
from bracket.seeding import load_roster
from bracket.settings import load_settings


def read_roster(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        return load_roster(yaml.safe_load(file))


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build a seeded single elimination bracket.')
    parser.add_argument('roster', help='Roster file (YAML or JSON)')
    parser.add_argument('--settings', help='Display settings YAML')
    parser.add_argument('--json', action='store_true', help='Print the bracket as JSON')
    args = parser.parse_args(argv)

    try:
        roster = read_roster(args.roster)
    except (OSError, yaml.YAMLError, RosterError) as e:
        print(f"Error: cannot load roster {args.roster}: {e}", file=sys.stderr)
        return 1

    settings = load_settings(args.settings)
    result = build_bracket(roster, settings)

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if args.json:
        print(json.dumps(get_bracket_display(result, settings), indent=2, ensure_ascii=False))
    else:
        print(render_bracket(result, settings))
    return 0


if __name__ == '__main__':
    sys.exit(main())
