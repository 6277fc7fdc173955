"""
Research MCP Server Implementation

Exposes the iterative research loop as MCP tools. Research runs as a
background job; clients poll for progress and collect the report.
"""

import asyncio
import logging
import threading
import uuid
from datetime import datetime, timedelta
from typing import Any

from mcp.server.fastmcp import FastMCP

from lead_research import create_orchestrator

logger = logging.getLogger("research")

mcp = FastMCP("Lead Research")

# Job storage system
_research_jobs: dict[str, dict[str, Any]] = {}
_jobs_lock = threading.Lock()

JOB_MAX_AGE = timedelta(hours=24)


class JobStatus:
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


STATUS_EMOJI = {
    JobStatus.PENDING: "⏳",
    JobStatus.IN_PROGRESS: "🔬",
    JobStatus.COMPLETED: "✅",
    JobStatus.FAILED: "❌",
}


def create_job(query: str) -> str:
    """Create a new research job and return job ID."""
    job_id = str(uuid.uuid4())
    with _jobs_lock:
        _research_jobs[job_id] = {
            "id": job_id,
            "query": query,
            "status": JobStatus.PENDING,
            "created_at": datetime.now().isoformat(),
            "started_at": None,
            "completed_at": None,
            "result": None,
            "error": None,
            "progress": {
                "iteration": 0,
                "max_iterations": 0,
                "subtasks_total": 0,
                "subtasks_settled": 0,
                "stage": "queued",
            },
        }
    return job_id


def get_job(job_id: str) -> dict[str, Any] | None:
    """Get job by ID."""
    return _research_jobs.get(job_id)


def update_job_status(job_id: str, status: str, **kwargs) -> None:
    """Update job status, timestamps and any additional fields."""
    with _jobs_lock:
        job = _research_jobs.get(job_id)
        if job is None:
            return
        job["status"] = status
        if status == JobStatus.IN_PROGRESS and job["started_at"] is None:
            job["started_at"] = datetime.now().isoformat()
        elif status in (JobStatus.COMPLETED, JobStatus.FAILED):
            job["completed_at"] = datetime.now().isoformat()
        job.update(kwargs)


def update_job_progress(job_id: str, event_type: str, **kwargs) -> None:
    """Fold an orchestrator progress event into the job's progress record."""
    with _jobs_lock:
        job = _research_jobs.get(job_id)
        if job is None:
            return
        progress = job["progress"]
        if event_type == "iteration_started":
            progress["iteration"] = kwargs["iteration"]
            progress["max_iterations"] = kwargs["max_iterations"]
            progress["subtasks_total"] = 0
            progress["subtasks_settled"] = 0
            progress["stage"] = "planning"
        elif event_type == "subtasks_delegated":
            progress["subtasks_total"] = kwargs["total_count"]
            progress["stage"] = "researching"
        elif event_type == "subtasks_settled":
            progress["subtasks_settled"] = kwargs["succeeded"] + kwargs["failed"]
            progress["stage"] = "integrating"
        elif event_type == "finalizing":
            progress["stage"] = "formatting citations"


def execute_research_job_sync(job_id: str, query: str) -> None:
    """Execute a research job in a background thread."""
    update_job_status(job_id, JobStatus.IN_PROGRESS)

    def progress_callback(event_type: str, **kwargs) -> None:
        update_job_progress(job_id, event_type, **kwargs)

    try:
        # Fresh orchestrator per job so no state is shared between jobs
        orchestrator = create_orchestrator(progress_callback)
        results = asyncio.run(orchestrator.conduct_research(query))
    except Exception as e:
        logger.error(f"❌ Research job {job_id} failed: {e}")
        update_job_status(job_id, JobStatus.FAILED, error=str(e))
        return

    update_job_status(
        job_id, JobStatus.COMPLETED, result=results["report"], full_results=results
    )


def cleanup_old_jobs(now: datetime | None = None) -> int:
    """Remove jobs older than 24 hours. Returns number of jobs removed."""
    cutoff_time = (now or datetime.now()) - JOB_MAX_AGE
    with _jobs_lock:
        jobs_to_remove = [
            job_id
            for job_id, job in _research_jobs.items()
            if datetime.fromisoformat(job["created_at"]) < cutoff_time
        ]
        for job_id in jobs_to_remove:
            del _research_jobs[job_id]
    return len(jobs_to_remove)


def format_job_status(job: dict[str, Any]) -> str:
    """Render a job for an MCP client."""
    status = job["status"]
    header = (
        f"Research Job Status: {status.upper()} {STATUS_EMOJI.get(status, '❓')}\n\n"
        f"Job ID: {job['id']}\nQuery: {job['query']}\n"
    )

    if status == JobStatus.PENDING:
        return header + (
            f"Created: {job['created_at']}\n\n"
            "The research job is queued and will start shortly."
        )

    if status == JobStatus.IN_PROGRESS:
        progress = job["progress"]
        progress_info = f"Stage: {progress['stage']}"
        if progress["max_iterations"]:
            progress_info += (
                f"\nIteration: {progress['iteration']}/{progress['max_iterations']}"
            )
        if progress["subtasks_total"]:
            progress_info += (
                f"\nSub-tasks settled: {progress['subtasks_settled']}/{progress['subtasks_total']}"
            )
        return header + (
            f"Started: {job['started_at']}\n{progress_info}\n\n"
            f'Call get_research_report("{job["id"]}") again to check progress.'
        )

    if status == JobStatus.COMPLETED:
        full_results = job.get("full_results") or {}
        source_count = len(full_results.get("sources_consulted", []))
        source_info = (
            f"📊 Research consulted {source_count} unique sources\n" if source_count else ""
        )
        return header + (
            f"Completed: {job['completed_at']}\n{source_info}\n"
            f"Here is the research report:\n\n{job['result']}"
        )

    return header + (
        f"Failed: {job['completed_at']}\nError: {job['error']}\n\n"
        "You can start a new research job with create_research_report."
    )


@mcp.tool()
async def create_research_report(query: str) -> str:
    """
    Start multi-agent research on a query as a background job.

    A lead researcher plans sub-tasks, parallel sub-agents search and read the
    web, and the final synthesis is returned with numbered citations. This
    returns immediately with a job ID; use get_research_report(job_id) to
    check status and retrieve the report. Research is expensive, so ask the
    user for confirmation before running it.

    Args:
        query: The research question, as a single focused question or statement

    Returns:
        Job ID and instructions for polling the research status
    """
    job_id = create_job(query)
    research_thread = threading.Thread(
        target=execute_research_job_sync, args=(job_id, query), daemon=True
    )
    research_thread.start()

    return (
        f"Research job started successfully! 🚀\n\nJob ID: {job_id}\nQuery: {query}\n\n"
        f'Next step: call get_research_report("{job_id}") to check the status.'
    )


@mcp.tool()
async def get_research_report(job_id: str) -> str:
    """
    Check status of a research job and retrieve the report when complete.

    Keep calling this tool with the same job_id until the status is
    'completed' or 'failed'. When presenting the report, keep its numbered
    citations and include its Sources section.

    Args:
        job_id: The job ID returned by create_research_report

    Returns:
        Job status and the research report (when complete) or progress information
    """
    job = get_job(job_id)
    if not job:
        return f"Job ID '{job_id}' not found. Please check the job ID and try again."
    return format_job_status(job)


@mcp.tool()
async def list_research_jobs() -> str:
    """
    List all active research jobs with their current status.

    Returns:
        List of all research jobs with their status and basic information
    """
    cleaned = cleanup_old_jobs()
    if not _research_jobs:
        return "No active research jobs found."

    job_list = []
    for job_id, job in list(_research_jobs.items()):
        query = job["query"][:50] + "..." if len(job["query"]) > 50 else job["query"]
        job_list.append(
            f"{STATUS_EMOJI.get(job['status'], '❓')} {job_id[:8]}... | "
            f"{job['status'].upper()} | {query} | Created: {job['created_at'][:19]}"
        )

    result = "Research Jobs:\n\n" + "\n".join(job_list)
    if cleaned > 0:
        result += f"\n\n(Cleaned up {cleaned} old jobs)"
    return result


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
