"""
Report supported languages that lack quiz content or a dashboard column,
and quiz content for languages that are not supported.

Usage:
    cd backend
    python scripts/check_content.py [--strict]

With --strict, exits 1 when any gap is found.
"""
import os
import sys

# Add project root to path so we can import engine modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from langlink.content import languages_with_questions
from langlink.engine.languages import content_gaps


def main(argv: list[str]) -> int:
    strict = "--strict" in argv
    gaps = content_gaps(languages_with_questions())
    if not gaps:
        print("All supported languages have quiz content and a dashboard column.")
        return 0

    print(f"{len(gaps)} language(s) with content gaps:")
    for gap in gaps:
        print(f"  {gap.language:<12} missing: {', '.join(gap.missing)}")
    return 1 if strict else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
