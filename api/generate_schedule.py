"""
Script to generate upcoming lessons for all active groups.

Meant to run from cron so the schedule always reaches a few weeks ahead.
Safe to run repeatedly: slots that already have a lesson are skipped.

Usage:
    python generate_schedule.py --weeks-ahead 8
"""
import argparse
import logging
import sys
from sqlmodel import Session
from school_admin.core.config import settings
from school_admin.core.database import engine
from school_admin.core.exceptions import SchoolAdminException
from school_admin.services.schedule_service import generate_lessons_for_all_groups
from school_admin.utils.time_utils import local_today

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate lessons for all active groups")
    parser.add_argument(
        "--weeks-ahead",
        type=int,
        default=settings.schedule_weeks_ahead_default,
        help=f"Weeks to generate ahead (default {settings.schedule_weeks_ahead_default})"
    )
    args = parser.parse_args(argv)

    today = local_today(settings.timezone)
    logger.info(f"Generating lessons {args.weeks_ahead} weeks ahead from {today}")

    try:
        with Session(engine) as session:
            summary = generate_lessons_for_all_groups(session, weeks_ahead=args.weeks_ahead, today=today)
    except SchoolAdminException as e:
        logger.error(f"Lesson generation failed: {type(e).__name__}: {str(e)}")
        return 1

    for result in summary.results:
        if result.error:
            logger.warning(f"Group {result.group_id} ({result.group_title}) skipped: {result.error}")
        for failure in result.errors:
            logger.warning(f"Group {result.group_id}: lesson on {failure.lesson_date} not saved: {failure.error}")

    logger.info(
        f"Done: {summary.total_generated} generated, "
        f"{summary.total_skipped} skipped, "
        f"{summary.total_failed} failed"
    )
    return 0 if summary.total_failed == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
