"""Entry point for snakedraft package."""

import argparse
import asyncio
import logging
from dataclasses import replace

from snakedraft.config import get_config


async def _run_demo(num_teams: int, num_rounds: int, seed: int) -> None:
    import random

    from snakedraft.api.services.draft_service import DraftService
    from snakedraft.catalog import StaticCatalogSource, generate_pool
    from snakedraft.core.draft import team_pick_numbers

    config = get_config()
    service = DraftService(
        config=config,
        source=StaticCatalogSource(generate_pool(config.catalog_size, seed=seed)),
        rng=random.Random(seed),
    )
    snapshot = await service.start_draft(num_teams=num_teams, num_rounds=num_rounds)
    draft_id = snapshot.board.draft_id

    print("Snakedraft - Superflex Snake Draft (Demo Mode)")
    print("=" * 50)
    settings = snapshot.board.settings
    for assignment in snapshot.personas:
        picks = ", ".join(str(n) for n in team_pick_numbers(assignment.team_index, settings))
        print(f"Team {assignment.team_index + 1}: {assignment.persona} (picks {picks})")
    print()

    complete = False
    while not complete:
        result = await service.advance(draft_id)
        pick = result.pick
        flag = f"  [{result.shift.severity.value} {result.shift.category.value}]" if result.shift else ""
        print(
            f"R{pick.round} #{pick.pick_number:>3} Team {pick.team_index + 1:>2}: "
            f"{pick.player_name} ({pick.position.value}){flag}"
        )
        complete = result.draft_complete

    print()
    for summary in await service.get_shift_summary(draft_id):
        top = summary.top_category.value if summary.top_category else "-"
        print(
            f"Team {summary.team_index + 1}: {summary.total_shifts} shifts "
            f"({summary.major_shift_count} major, top: {top})"
        )


def main() -> None:
    """Main entry point for the snakedraft application."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Snakedraft - Superflex Snake Draft",
        prog="snakedraft",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run an offline draft with archetype drafters only (no server)",
    )
    parser.add_argument("--teams", type=int, default=config.num_teams, help="Number of teams")
    parser.add_argument("--rounds", type=int, default=config.num_rounds, help="Number of rounds")
    parser.add_argument("--seed", type=int, default=7, help="Random seed for demo mode")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="API host")
    parser.add_argument("--port", type=int, default=8000, help="API port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Command-line draft shape overrides the environment
    problems = replace(config, num_teams=args.teams, num_rounds=args.rounds).validate()
    if problems:
        parser.error("; ".join(problems))

    if args.demo:
        asyncio.run(_run_demo(args.teams, args.rounds, args.seed))
    else:
        from snakedraft.api.main import run_api

        run_api(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
