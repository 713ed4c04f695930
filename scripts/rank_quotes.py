#!/usr/bin/env python3

import argparse, sys, json
from pathlib import Path

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from stablescore.quotes.ranking import rank_quotes, ranked_frame
from stablescore.scoring.strategy_factory import get_rules, rules_from_config


def main():
    parser = argparse.ArgumentParser(
        description="Score and rank a set of Medigap quotes with StableScore."
    )
    parser.add_argument("quotes", type=str, help="JSON file with a list of quote records")
    parser.add_argument("--plan", type=str, default=None, help="Preferred plan letter (e.g. G)")
    parser.add_argument("--company", type=str, default=None, help="Preferred carrier name")
    parser.add_argument(
        "--preference",
        choices=["stability", "brand", "price"],
        default=None,
        help="Qualitative company preference",
    )
    parser.add_argument("--household", action="store_true", help="Another household member is applying")
    parser.add_argument("--same-company", action="store_true", help="Household member is with the same carrier")
    parser.add_argument("--ruleset", type=str, default=None, help="canonical | legacy (default: from config)")
    parser.add_argument("--csv", type=str, default=None, help="Write the ranked table to this CSV file")
    args = parser.parse_args()

    path = Path(args.quotes)
    if not path.exists():
        print(f"[ERROR] Quotes file not found: {path}")
        sys.exit(1)

    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)
    if isinstance(records, dict):
        records = records.get("quotes", [])

    try:
        rules = get_rules(args.ruleset) if args.ruleset else rules_from_config()
    except ValueError as e:
        print(f"[ERROR] {e}")
        sys.exit(2)

    preferences = None
    if args.plan or args.company or args.preference:
        preferences = {
            "planPreference": args.plan,
            "specificCompany": args.company,
            "companyPreference": args.preference,
        }
    household = {
        "hasHouseholdMember": args.household,
        "sameCompanyInsurance": args.same_company,
    }

    ranked = rank_quotes(records, preferences=preferences, household=household, rules=rules)
    df = ranked_frame(ranked)

    print(f"=== {len(df)} quotes ranked ({rules.name} ruleset) ===")
    print(df.to_string(index=False) if not df.empty else "(no usable quotes)")

    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"\nSaved ranking to: {args.csv}")


if __name__ == "__main__":
    main()
