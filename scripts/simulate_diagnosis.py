#!/usr/bin/env python3
"""Simulate one pass through the nail questionnaire in-process.

Drives a QuestionnaireSession through all 13 questions, printing each
question, the chosen answer and the available choices, then submits to a
DiagnosisPipeline backed by a small in-memory catalog and prints the
scores, diagnosis and recommended products.

By default answers are **randomised** (``--random``, on by default).  Use
``--no-random`` to pick the first (mildest) option everywhere.

Usage::

    # Random run
    python scripts/simulate_diagnosis.py

    # Reproducible random run
    python scripts/simulate_diagnosis.py --seed 7

    # Mildest answers (always "Generally Healthy Nails")
    python scripts/simulate_diagnosis.py --no-random

    # Simulate a storefront outage
    python scripts/simulate_diagnosis.py --empty-catalog
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure src/ is on sys.path so the script runs from a plain checkout.
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from nail_diagnosis.catalog import StaticCatalogReader  # noqa: E402
from nail_diagnosis.models.catalog import CatalogProduct  # noqa: E402
from nail_diagnosis.models.question import Question  # noqa: E402
from nail_diagnosis.models.result import RecommendationResult  # noqa: E402
from nail_diagnosis.pipeline import DiagnosisPipeline  # noqa: E402
from nail_diagnosis.ruleset import RulesetStore  # noqa: E402
from nail_diagnosis.session import QuestionnaireSession  # noqa: E402

# ---------------------------------------------------------------------------
# In-memory catalog resembling a small storefront
# ---------------------------------------------------------------------------

DEMO_CATALOG = [
    {"id": "p-01", "name": "Classic Red Polish", "price": "12.00", "featured": True,
     "category": {"name": "Nail Polish"}},
    {"id": "p-02", "name": "Nourishing Cuticle Oil", "price": "18.50",
     "description": "Jojoba and vitamin E blend", "category": {"name": "Nail Care"}},
    {"id": "p-03", "name": "Diamond Strength Serum", "price": "24.00",
     "description": "Keratin treatment for weak nails", "category": {"name": "Treatments"}},
    {"id": "p-04", "name": "Ridge Filling Base Coat", "price": "14.00",
     "category": {"name": "Nail Polish"}},
    {"id": "p-05", "name": "Velvet Hand Cream", "price": "16.00",
     "description": "Moisturizing shea formula"},
    {"id": "p-06", "name": "Glass Nail File", "price": "9.00", "featured": True},
    {"id": "p-07", "name": "Growth Boost Drops", "price": "22.00",
     "category": {"name": "Treatments"}},
]

_DOUBLE_LINE = "=" * 70
_SINGLE_LINE = "-" * 70

_quiet = False


def _print(*args, **kwargs) -> None:
    """Print wrapper that respects the --quiet flag."""
    if not _quiet:
        print(*args, **kwargs)


def log_section(title: str) -> None:
    _print(f"\n{_DOUBLE_LINE}")
    _print(f" {title}")
    _print(_DOUBLE_LINE)


def log_question_and_answer(index: int, total: int, q: Question, answer: str) -> None:
    """Print one wizard screen with the chosen option marked."""
    _print(f"\n[{index}/{total}] {q.category_caption}")
    _print(f"  Q: {q.question}  ({q.qid})")
    for opt in q.options:
        marker = "->" if opt.value == answer else "  "
        _print(f"    {marker} {opt.label}  [{opt.value}]")


def log_result(result: RecommendationResult) -> None:
    s = result.scores
    log_section("SCORES")
    _print(f"  brittleness={s.brittleness} dryness={s.dryness} damage={s.damage} "
           f"growth_deficiency={s.growth_deficiency} total={s.total}")

    d = result.diagnosis
    log_section(f"DIAGNOSIS: {d.condition} ({d.severity})")
    _print(f"  {d.description}")
    _print("\n  Recommendations:")
    for tip in d.recommendations:
        _print(f"    - {tip}")
    _print(f"\n  Topic tags: {', '.join(d.topic_tags)}")

    log_section("RECOMMENDED PRODUCTS")
    if not result.recommended_products:
        _print("  (none) -> Browse All Products")
    for p in result.recommended_products:
        category = (p.category and p.category.name) or "-"
        star = " *" if p.featured else ""
        _print(f"  {p.id:<6s} {p.name:<28s} ${p.price:>6}  {category}{star}")


def choose_answer(q: Question, rng: random.Random, random_mode: bool) -> str:
    if not random_mode:
        return q.options[0].value
    return rng.choice(q.options).value


async def run_simulation(
    random_mode: bool, seed: int | None, empty_catalog: bool,
) -> RecommendationResult:
    store = RulesetStore()
    store.load()

    products = [] if empty_catalog else [CatalogProduct.model_validate(p) for p in DEMO_CATALOG]
    pipeline = DiagnosisPipeline(store, StaticCatalogReader(products))
    session = QuestionnaireSession(store)
    rng = random.Random(seed)

    log_section(f"NAIL QUESTIONNAIRE ({'random' if random_mode else 'mildest'} answers)")
    session.start()
    total = len(store.questions)
    while True:
        q = session.current_question
        answer = choose_answer(q, rng, random_mode)
        session.answer(answer)
        log_question_and_answer(session.current_index + 1, total, q, answer)
        if session.is_last_question:
            break
        session.next()

    _print(f"\n{_SINGLE_LINE}")
    _print(f" Submitting {len(session.answers)} answers")
    _print(_SINGLE_LINE)

    result = await session.submit(pipeline)
    log_result(result)
    return result


def main() -> None:
    global _quiet

    parser = argparse.ArgumentParser(
        description="Simulate the nail questionnaire and recommendation flow in-process.",
    )
    parser.add_argument(
        "--random",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Randomise answers (default: on). Use --no-random for the mildest answers.",
    )
    parser.add_argument(
        "--seed",
        type=int, default=None,
        help="RNG seed for reproducible random answers",
    )
    parser.add_argument(
        "--empty-catalog",
        action="store_true",
        help="Use an empty catalog (no products can be recommended)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logs from the scoring and classification stages",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all print output",
    )
    args = parser.parse_args()
    _quiet = args.quiet

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    asyncio.run(run_simulation(args.random, args.seed, args.empty_catalog))


if __name__ == "__main__":
    main()
