#!/usr/bin/env python3
"""Live smoke test against a Jira Cloud site.

Exercises every client call the gateway uses: connectivity, read
endpoints, then create -> get -> transition -> delete on a throwaway
issue. Prints a pass/fail summary and exits non-zero on any failure.

Usage:
    smoke_test.py                 # Full run against PROJECT_KEY
    smoke_test.py --read-only     # Skip issue creation
    smoke_test.py --keep-issue    # Do not delete the created issue
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jira_gateway.config import get_config
from jira_gateway.jira import JiraClient, JiraClientError, create_client


class SmokeRun:
    """Tracks pass/fail counts and prints one line per check."""

    def __init__(self):
        self.passed = 0
        self.total = 0

    def record(self, name: str, ok: bool, detail: str = "") -> bool:
        self.total += 1
        if ok:
            self.passed += 1
        mark = "PASS" if ok else "FAIL"
        print(f"  [{mark}] {name}{f' - {detail}' if detail else ''}")
        return ok


async def run_checks(client: JiraClient, config, args) -> SmokeRun:
    run = SmokeRun()

    connection = await client.test_connection()
    if not run.record("connection", connection["success"], connection["user_email"] or connection["error"]):
        return run

    async def check(name: str, coro, describe=lambda result: ""):
        try:
            result = await coro
        except JiraClientError as e:
            run.record(name, False, str(e))
            return None
        run.record(name, True, describe(result))
        return result

    await check("server info", client.server_info(), lambda r: r.get("version", ""))
    await check("list projects", client.list_projects(), lambda r: f"{len(r)} projects")
    await check("list users", client.list_users(), lambda r: f"{len(r)} users")
    await check(
        "search issues",
        client.search_issues(config.project_key),
        lambda r: f"{len(r.get('issues', []))} issues",
    )

    if args.read_only:
        return run

    issue_key = await check(
        "create issue",
        client.create_issue(
            config.project_key,
            "Task",
            "Gateway Smoke Test Issue",
            "Created by the gateway smoke test.\n\nSafe to delete.",
        ),
        lambda key: key,
    )
    if not issue_key:
        return run

    issue = await check("get issue", client.get_issue(issue_key))
    if issue is None:
        run.record("issue exists", False, issue_key)

    transitions = await check(
        "get transitions",
        client.get_transitions(issue_key),
        lambda r: ", ".join(t.get("name", "?") for t in r.get("transitions", [])),
    )
    available = (transitions or {}).get("transitions") or []
    if available:
        await check(
            "transition issue",
            client.transition_issue(issue_key, available[0]["id"]),
            lambda code: f"HTTP {code}",
        )

    if not args.keep_issue:
        await check("delete issue", client.delete_issue(issue_key), lambda _: issue_key)

    return run


async def run_smoke_test(config, args) -> SmokeRun:
    async with create_client(config) as client:
        return await run_checks(client, config, args)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Smoke test the Jira Cloud connection")
    parser.add_argument("--read-only", action="store_true", help="Skip write operations")
    parser.add_argument(
        "--keep-issue", action="store_true", help="Do not delete the created issue"
    )
    args = parser.parse_args()

    try:
        config = get_config()
    except Exception as e:
        print(f"Error: Failed to load configuration: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.is_configured:
        print(
            f"Error: missing environment variables: {', '.join(config.missing_credentials())}",
            file=sys.stderr,
        )
        sys.exit(1)

    print("=" * 70)
    print(f"  Jira Cloud smoke test: {config.instance_url}")
    print("=" * 70)

    try:
        run = asyncio.run(run_smoke_test(config, args))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)

    print("=" * 70)
    print(f"  Passed {run.passed}/{run.total}")
    print("=" * 70)
    sys.exit(0 if run.passed == run.total else 1)


if __name__ == "__main__":
    main()
