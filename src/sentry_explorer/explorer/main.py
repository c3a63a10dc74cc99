"""CLI entrypoint for the Sentry explorer.

Organizations, tokens and the project-name cache go through
:class:`sentry_explorer.store.ConfigStore`; Sentry itself is reached via
:class:`sentry_explorer.explorer.sentry.client.SentryClient`.
"""

from __future__ import annotations

import argparse
import logging
import sys

import requests
from pydantic import ValidationError

from sentry_explorer import __version__
from sentry_explorer.explorer.config import ExplorerSettings
from sentry_explorer.explorer.logging import configure_logging
from sentry_explorer.explorer.sentry.client import Issue, SentryApiError, SentryClient
from sentry_explorer.store import (
    ConfigStore,
    CryptoError,
    KeyringSecretBackend,
    MemorySecretBackend,
    NotFound,
    SecretBackend,
    StoreError,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sentry-explorer",
        description="Browse Sentry organizations, projects and issues from the terminal",
    )
    parser.add_argument("--version", action="version", version=f"sentry-explorer {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    org = subparsers.add_parser("org", help="Manage organizations")
    org_sub = org.add_subparsers(dest="org_command", required=True)
    org_sub.add_parser("list", help="List organizations and their cached projects")
    org_add = org_sub.add_parser("add", help="Add an organization")
    org_add.add_argument("name", help="Local organization name")
    org_add.add_argument("slug", help="Sentry organization slug")

    login = subparsers.add_parser("login", help="Store an auth token for an organization")
    login.add_argument("org", help="Local organization name")
    login.add_argument("token", help="Sentry authentication token")

    project = subparsers.add_parser("project", help="Look up projects")
    project_sub = project.add_subparsers(dest="project_command", required=True)
    project_find = project_sub.add_parser(
        "find", help="Find which organization owns a project, caching its name"
    )
    project_find.add_argument("slug", help="Project slug")

    issue = subparsers.add_parser("issue", help="Inspect issues")
    issue_sub = issue.add_subparsers(dest="issue_command", required=True)
    issue_list = issue_sub.add_parser("list", help="List unresolved issues")
    issue_list.add_argument(
        "--org", default=None, help="Only this organization (defaults to all authenticated)"
    )
    issue_list.add_argument("--project", default="default", help="Project slug")
    issue_view = issue_sub.add_parser(
        "view", help="Show details of an issue, searching every authenticated organization"
    )
    issue_view.add_argument("id", help="Issue ID")
    issue_view.add_argument("--project", default="default", help="Project slug")

    return parser


def _build_backend(settings: ExplorerSettings) -> SecretBackend:
    if settings.secret_backend == "memory":
        return MemorySecretBackend()
    return KeyringSecretBackend()


def _client(settings: ExplorerSettings, token: str) -> SentryClient:
    return SentryClient(token=token, base_url=settings.sentry_base_url)


def _cmd_org_list(store: ConfigStore) -> int:
    organizations = list(store.organizations())
    if not organizations:
        print("No organizations configured")
        return 0

    print("Organizations:")
    for org in organizations:
        status = "authenticated" if org.get_auth_token() is not None else "not authenticated"
        print(f"  {org.name} ({org.slug}) - {status}")
        for slug in org.project_slugs():
            try:
                name = store.get_project(org.name, slug)
            except CryptoError as e:
                logger.warning(
                    "Cached project name unreadable",
                    extra={"organization": org.name, "project": slug, "error": str(e)},
                )
                continue
            print(f"    - {name} ({slug})")
    return 0


def _cmd_project_find(store: ConfigStore, settings: ExplorerSettings, slug: str) -> int:
    found: list[tuple[str, str]] = []
    for org, cached in store.find_project(slug):
        if cached:
            name = store.get_project(org.name, slug)
            if name is not None:
                found.append((org.name, name))
            continue

        token = org.get_auth_token()
        if token is None:
            continue
        client = _client(settings, token)
        try:
            projects = client.list_projects(org.slug)
        except (SentryApiError, requests.RequestException) as e:
            logger.warning(
                "Project lookup failed, skipping organization",
                extra={"organization": org.name, "error": str(e)},
            )
            continue
        finally:
            client.close()
        match = next((p for p in projects if p.slug == slug), None)
        if match is not None:
            store.cache_project(org.name, slug, match.name)
            found.append((org.name, match.name))

    if not found:
        print(f"Project '{slug}' not found in any organization")
        return 3
    for org_name, name in found:
        print(f"Found project: {name} ({slug}) in {org_name}")
    return 0


def _cmd_issue_list(
    store: ConfigStore, settings: ExplorerSettings, org_name: str | None, project: str
) -> int:
    if org_name is not None:
        org = store.get_organization(org_name)
        if org is None:
            print(f"Organization '{org_name}' not found. Add it first with 'org add'.")
            return 3
        organizations = [org]
    else:
        organizations = list(store.organizations())

    if not organizations:
        print("No organizations configured. Add one first with 'org add'.")
        return 0

    for org in organizations:
        token = org.get_auth_token()
        if token is None:
            if org_name is not None:
                print(f"Not logged in for organization '{org.name}'. Use 'login' first.")
                return 3
            continue

        client = _client(settings, token)
        try:
            issues = client.list_issues(org.slug, project)
        finally:
            client.close()

        print(f"\nFetching issues for organization: {org.name}")
        if not issues:
            print("  No issues found")
        for issue in issues:
            print(f"  {issue.id}: {issue.title} ({issue.status})")
    return 0


def _print_issue(issue: Issue) -> None:
    print(f"Issue {issue.id}: {issue.title}")
    print(f"  Status:    {issue.status}")
    print(f"  Level:     {issue.level}")
    print(f"  Culprit:   {issue.culprit}")
    print(f"  Last seen: {issue.last_seen}")
    print(f"  Events:    {issue.count}")
    print(f"  Users:     {issue.user_count}")


def _cmd_issue_view(
    store: ConfigStore, settings: ExplorerSettings, issue_id: str, project: str
) -> int:
    for org in store.organizations():
        token = org.get_auth_token()
        if token is None:
            continue

        client = _client(settings, token)
        try:
            issues = client.list_issues(org.slug, project)
        except (SentryApiError, requests.RequestException) as e:
            logger.warning(
                "Issue lookup failed, skipping organization",
                extra={"organization": org.name, "error": str(e)},
            )
            continue
        finally:
            client.close()

        issue = next((i for i in issues if i.id == issue_id), None)
        if issue is not None:
            _print_issue(issue)
            return 0

    print("Issue not found in any organization")
    return 3


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ExplorerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        store = ConfigStore(settings.config_file, _build_backend(settings))
        store.load()

        if args.command == "org" and args.org_command == "add":
            store.add_organization(args.name, args.slug)
            store.save()
            print(f"Added organization: {args.name} ({args.slug})")
            return 0

        if args.command == "org" and args.org_command == "list":
            return _cmd_org_list(store)

        if args.command == "login":
            if not args.token:
                print("Auth token must not be empty", file=sys.stderr)
                return 2
            store.set_auth_token(args.org, args.token)
            print(f"Successfully logged in to Sentry for organization: {args.org}")
            return 0

        if args.command == "project" and args.project_command == "find":
            return _cmd_project_find(store, settings, args.slug)

        if args.command == "issue" and args.issue_command == "list":
            return _cmd_issue_list(store, settings, args.org, args.project)

        if args.command == "issue" and args.issue_command == "view":
            return _cmd_issue_view(store, settings, args.id, args.project)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except NotFound as e:
        print(str(e), file=sys.stderr)
        return 3

    except StoreError as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
