#!/usr/bin/env python3
"""ADF examples CLI.

Builds sample Atlassian Document Format (ADF) documents with the gateway's
builder helpers, validates them, and prints JSON or a plain-text preview.
Optionally creates live Jira issues from a few of them.

Usage:
    adf_examples.py                      # Validate and print all examples as JSON
    adf_examples.py --preview            # Print plain-text previews instead
    adf_examples.py --only bullet_list   # Single example
    adf_examples.py --create             # Also create issues in PROJECT_KEY
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jira_gateway.adf import (
    Document,
    bullet_list,
    bullet_list_document,
    code_block,
    code_block_document,
    combine_blocks,
    document_to_text,
    formatted_document,
    heading,
    heading_with_content_document,
    is_valid_document,
    link_document,
    ordered_list_document,
    text,
    text_to_document,
)
from jira_gateway.adf.nodes import Paragraph
from jira_gateway.config import get_config
from jira_gateway.jira import JiraClientError, create_client


def simple_text_example() -> Document:
    return text_to_document(
        "This is a simple description with multiple lines.\n\nThis is the second paragraph."
    )


def formatted_text_example() -> Document:
    return formatted_document(
        [
            {"text": "This issue requires "},
            {"text": "immediate attention", "marks": [{"type": "strong"}]},
            {"text": " and should be handled with "},
            {"text": "care", "marks": [{"type": "em"}]},
            {"text": "."},
        ]
    )


def bullet_list_example() -> Document:
    return bullet_list_document(
        [
            "Review the current implementation",
            "Identify potential security vulnerabilities",
            "Create test cases for edge scenarios",
            "Update documentation",
        ]
    )


def numbered_list_example() -> Document:
    return ordered_list_document(
        [
            "Clone the repository",
            "Install dependencies",
            "Configure environment variables",
            "Start the gateway",
        ]
    )


def heading_example() -> Document:
    return heading_with_content_document(
        "Bug Report",
        2,
        "The following issue has been identified in the login functionality:",
    )


def code_block_example() -> Document:
    code = (
        "def authenticate(username, password):\n"
        "    if not username or not password:\n"
        '        raise ValueError("Missing credentials")\n'
        "    return jwt.encode({\"username\": username}, secret)"
    )
    return code_block_document(code, "python")


def link_example() -> Document:
    return link_document(
        "Please refer to our documentation",
        "https://developer.atlassian.com/cloud/jira/platform/apis/document/structure/",
    )


def complex_example() -> Document:
    return combine_blocks(
        [
            heading("Issue Description", 2),
            Paragraph(
                (
                    text("This is a "),
                    text("critical", [{"type": "strong"}]),
                    text(" issue that needs immediate attention."),
                )
            ),
            bullet_list(["Affects user authentication", "Blocks new user registration"]),
            code_block("print('Debug info')", "python"),
        ]
    )


EXAMPLES = {
    "simple_text": simple_text_example,
    "formatted_text": formatted_text_example,
    "bullet_list": bullet_list_example,
    "numbered_list": numbered_list_example,
    "heading": heading_example,
    "code_block": code_block_example,
    "link": link_example,
    "complex": complex_example,
}

# Examples sent as live issues with --create
LIVE_EXAMPLES = ("simple_text", "bullet_list", "code_block")


def validate_examples(names: list[str], preview: bool) -> bool:
    """Build, validate and print each example. Returns True if all valid."""
    all_valid = True
    for name in names:
        document = EXAMPLES[name]()
        valid = is_valid_document(document)
        all_valid = all_valid and valid

        print("=" * 70)
        print(f"  {name}: {'valid' if valid else 'INVALID'}")
        print("=" * 70)
        if preview:
            print(document_to_text(document))
        else:
            print(json.dumps(document.to_dict(), indent=2))
        print("")
    return all_valid


async def create_live_issues(config) -> int:
    """Create one issue per live example. Returns number of failures."""
    failures = 0
    async with create_client(config) as client:
        for name in LIVE_EXAMPLES:
            try:
                key = await client.create_issue(
                    config.project_key, "Task", f"ADF Test - {name}", EXAMPLES[name]()
                )
                print(f"  Created {key} from {name}")
            except JiraClientError as e:
                failures += 1
                print(f"  Failed to create {name}: {e}", file=sys.stderr)
    return failures


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Build and validate example ADF documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration for --create (in .env or environment):
    ATLASSIAN_USERNAME=user@example.com
    ATLASSIAN_API_KEY=your_api_token
    DOMAIN=your-site
    PROJECT_KEY=PROJ
        """,
    )
    parser.add_argument(
        "--only",
        choices=sorted(EXAMPLES),
        action="append",
        help="Run only the named example (repeatable)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print plain-text previews instead of JSON",
    )
    parser.add_argument(
        "--create",
        action="store_true",
        help="Also create live Jira issues from selected examples",
    )
    args = parser.parse_args()

    names = args.only or list(EXAMPLES)
    all_valid = validate_examples(names, args.preview)

    if args.create:
        config = get_config()
        if not config.is_configured:
            print(
                f"Error: missing {', '.join(config.missing_credentials())}",
                file=sys.stderr,
            )
            sys.exit(1)
        if asyncio.run(create_live_issues(config)):
            sys.exit(1)

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
