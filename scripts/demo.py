#!/usr/bin/env python3
"""
Walk the built-in database-selection tree along a few answer paths.

Usage (from project root):
  python scripts/demo.py

Output: formatted table of recommendations, then a saved shareable result.
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

PATHS = {
    "relational-strict": [("data-shape", "relational"), ("consistency", "strict")],
    "relational-relaxed": [("data-shape", "relational"), ("consistency", "relaxed"), ("scale", "modest")],
    "documents-massive": [("data-shape", "documents"), ("scale", "massive")],
    "key-value-massive": [("data-shape", "key-value"), ("scale", "massive")],
}


def main() -> int:
    from journey.errors import JourneyError
    from journey.models import Answer
    from journey.sample_trees import DATABASE_SELECTION
    from journey.services import (
        InMemoryAnalyticsSink,
        InMemoryDecisionStore,
        TreeRepository,
        summarize_analytics,
        track_event,
    )
    from journey.utils.logging import configure_logging
    from shared.schemas import AnalyticsEvent

    configure_logging(level="WARNING", log_dir=ROOT / "logs")
    repo = TreeRepository([DATABASE_SELECTION])
    store = InMemoryDecisionStore()
    analytics = InMemoryAnalyticsSink()
    tree_id = DATABASE_SELECTION["id"]

    for summary in repo.summaries():
        print(f"Tree: {summary.title} (id={summary.id}, {summary.question_count} questions, ~{summary.estimated_time})")
    print()

    col_path = 22
    col_winner = 12
    col_conf = 8
    header = f"{'Path':<{col_path}} {'Winner':<{col_winner}} {'Conf.':<{col_conf}} Scores"
    print(header)
    print("-" * (len(header) + 30))

    last = None
    for name, steps in PATHS.items():
        answers = [Answer(question_id=q, option_id=o) for q, o in steps]
        track_event(analytics, AnalyticsEvent.TREE_STARTED, tree_id)
        try:
            result = repo.recommend(tree_id, answers)
        except JourneyError as e:
            print(f"{name:<{col_path}} error: {e.code.value} {e.message}")
            continue
        track_event(analytics, AnalyticsEvent.RESULT_GENERATED, tree_id, metadata={"recommendation": result.recommendation})
        scores = ", ".join(f"{k}={v}" for k, v in sorted(result.scores.items()))
        print(f"{name:<{col_path}} {result.recommendation:<{col_winner}} {result.confidence.value:<{col_conf}} {scores}")
        if result.tie_breaker:
            print(f"{'':<{col_path}} tie-break: {result.tie_breaker}")
        last = (answers, result)

    if last:
        answers, result = last
        saved = store.save(tree_id, answers, result)
        print()
        print(f"Saved last result as /results/{saved.shareable_slug}")
    report = summarize_analytics(analytics, store)
    print(
        f"Completion: {report.results_generated}/{report.tree_starts} walks produced a recommendation"
        f" ({report.completion_rate}%)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
