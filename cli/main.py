"""
Lead Research - Command Line Entry Point

Runs one research process for a query and prints the cited report.
"""

import argparse
import asyncio
import sys

from lead_research import ResearchError, create_orchestrator, setup_logging


def print_progress(event_type: str, **kwargs) -> None:
    """Print research progress events to stderr."""
    if event_type == "iteration_started":
        print(
            f"🔁 Iteration {kwargs['iteration']}/{kwargs['max_iterations']}",
            file=sys.stderr,
        )
    elif event_type == "subtasks_delegated":
        print(f"📤 Delegating {kwargs['total_count']} sub-tasks...", file=sys.stderr)
    elif event_type == "subtasks_settled":
        print(
            f"📥 {kwargs['succeeded']} succeeded, {kwargs['failed']} failed",
            file=sys.stderr,
        )
    elif event_type == "finalizing":
        print("✍️ Formatting citations...", file=sys.stderr)


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Iterative multi-agent research",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/main.py "Machine Learning in Healthcare"
  python cli/main.py "Compare Rust and Go for network services" --max-iterations 2
        """,
    )
    parser.add_argument("query", help="Research query to investigate")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Maximum plan-and-delegate rounds (default: from settings, 3)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Echo research log lines to stderr"
    )
    args = parser.parse_args()

    setup_logging(console=args.verbose)
    orchestrator = create_orchestrator(
        print_progress, max_iterations=args.max_iterations
    )

    print("🚀 Lead Research", file=sys.stderr)
    print("=" * 50, file=sys.stderr)
    print(f"📋 Query: {args.query}", file=sys.stderr)
    print("=" * 50, file=sys.stderr)

    try:
        results = await orchestrator.conduct_research(args.query)
    except ResearchError as e:
        print(f"❌ Research failed: {e}", file=sys.stderr)
        return 1

    print("\n✨ Research Complete!", file=sys.stderr)
    print(
        f"   Iterations: {results['iterations']} ({results['stop_reason']})",
        file=sys.stderr,
    )
    print(
        f"   Sub-tasks: {results['subtasks_total']} "
        f"({results['subtasks_failed']} failed)",
        file=sys.stderr,
    )
    print(results["report"])
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
