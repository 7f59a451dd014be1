#!/usr/bin/env python3
"""
Print a dashboard snapshot, project analytics or the resource report as JSON.

Reads the database named by the active configuration (or ``--config`` /
``PULSE_DATABASE_URL``).  Read-only: the session is rolled back on exit.

Usage:
    python3 scripts/dashboard_report.py dashboard --user-id <uuid> [--role admin]
        [--start 2024-01-01T00:00:00+00:00] [--end ...] [--project-id <uuid>]
    python3 scripts/dashboard_report.py project --user-id <uuid> --project-id <uuid>
    python3 scripts/dashboard_report.py resources
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from uuid import UUID

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _aware(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise argparse.ArgumentTypeError(f"timestamp needs a UTC offset: {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print ProjectPulse analytics as JSON.",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    sub = parser.add_subparsers(dest="report", required=True)

    dashboard = sub.add_parser("dashboard", help="Dashboard snapshot")
    dashboard.add_argument("--user-id", type=UUID, required=True)
    dashboard.add_argument("--role", choices=["admin", "manager", "member"], default="member")
    dashboard.add_argument("--start", type=_aware, default=None)
    dashboard.add_argument("--end", type=_aware, default=None)
    dashboard.add_argument("--project-id", type=UUID, default=None)

    project = sub.add_parser("project", help="Analytics of one project")
    project.add_argument("--user-id", type=UUID, required=True)
    project.add_argument("--role", choices=["admin", "manager", "member"], default="member")
    project.add_argument("--project-id", type=UUID, required=True)

    resources = sub.add_parser("resources", help="Resource utilization and team stats")
    resources.add_argument("--stats-only", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from pulse_config import get_active_config
    from pulse_kernel.db.engine import get_session, init_engine_from_url
    from pulse_kernel.exceptions import PulseError
    from pulse_kernel.logging_config import configure_logging
    from pulse_kernel.models.user import MemberRole
    from pulse_modules.analytics import (
        AnalyticsService,
        DashboardFilter,
        RequestContext,
        dumps,
    )
    from pulse_modules.resources import ResourceService

    try:
        config = get_active_config(args.config)
    except PulseError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    configure_logging(level=config.logging.level)
    init_engine_from_url(
        config.database.url,
        echo=config.database.echo,
        pool_size=config.database.pool_size,
    )
    session = get_session()

    try:
        if args.report == "resources":
            service = ResourceService(session)
            if args.stats_only:
                print(dumps(service.get_team_stats(), indent=2))
            else:
                print(dumps({
                    "resources": service.list_resources(),
                    "stats": service.get_team_stats(),
                }, indent=2))
            return 0

        context = RequestContext(user_id=args.user_id, role=MemberRole(args.role))
        analytics = AnalyticsService(session, config=config.analytics)
        if args.report == "project":
            print(dumps(analytics.get_project_analytics(context, args.project_id), indent=2))
        else:
            filters = DashboardFilter(
                start_date=args.start,
                end_date=args.end,
                project_id=args.project_id,
            )
            print(dumps(analytics.get_dashboard_snapshot(context, filters), indent=2))
        return 0

    except PulseError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    finally:
        session.rollback()
        session.close()


if __name__ == "__main__":
    sys.exit(main())
