"""
Parallel sub-task delegation.

Runs a batch of independent research sub-tasks concurrently and waits for all
of them to settle. A failing sub-task yields a Failure record; it never
cancels its siblings or aborts the batch.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import NamedTuple

logger = logging.getLogger("research")


class Success(NamedTuple):
    """Finding produced by a sub-agent."""

    finding: str


class Failure(NamedTuple):
    """Description of why a sub-task failed."""

    error: str


SubTaskOutcome = Success | Failure


class SubTaskResult(NamedTuple):
    """Outcome of one delegated task."""

    task: str
    outcome: SubTaskOutcome

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, Success)


def describe_error(error: BaseException) -> str:
    """Render an exception for the research log."""
    return str(error) or type(error).__name__


async def delegate_subtasks(
    tasks: Sequence[str],
    run_subtask: Callable[[str], Awaitable[str]],
    batch_id: str = "",
) -> list[SubTaskResult]:
    """
    Run every task concurrently and collect one result per task.

    Args:
        tasks: Task descriptions, in planner order
        run_subtask: Coroutine function executing a single task
        batch_id: Identifier used in log lines

    Returns:
        Results in the same order as ``tasks``
    """
    batch_start = time.time()
    logger.info(f"🚀 [{batch_id}] Dispatching {len(tasks)} sub-tasks concurrently")

    async def settle(task: str, index: int) -> SubTaskResult:
        task_id = f"{batch_id}-{index}"
        task_start = time.time()
        try:
            finding = await run_subtask(task)
        except Exception as e:
            logger.warning(
                f"  ❌ [{task_id}] Sub-task '{task[:50]}' failed after "
                f"{time.time() - task_start:.2f} seconds: {e}"
            )
            return SubTaskResult(task, Failure(describe_error(e)))

        logger.info(
            f"  ✅ [{task_id}] Sub-task '{task[:50]}' completed in "
            f"{time.time() - task_start:.2f} seconds"
        )
        return SubTaskResult(task, Success(finding))

    results = await asyncio.gather(
        *(settle(task, i) for i, task in enumerate(tasks))
    )

    failed = sum(1 for result in results if not result.succeeded)
    logger.info(
        f"🎯 [{batch_id}] {len(results) - failed}/{len(results)} sub-tasks succeeded "
        f"in {time.time() - batch_start:.2f} seconds"
    )
    return list(results)
