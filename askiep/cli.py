"""CLI tools for AskIEP administration."""

import asyncio
import datetime as dt

import click
from sqlalchemy.exc import SQLAlchemyError

from askiep.core.config import settings
from askiep.core.errors import AppError
from askiep.db.session import SessionLocal, engine


@click.group()
def cli():
    """AskIEP CLI tools."""
    pass


@cli.command()
def init_db():
    """
    Create all tables directly from the ORM metadata.

    Intended for local installs and throwaway databases; use upgrade-db
    for anything that will later be migrated.
    """
    from askiep.db.base import Base
    import askiep.db.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        raise click.ClickException(f"Could not create tables: {e}")
    click.echo(f"✓ Tables created on {engine.url.render_as_string(hide_password=True)}")


@cli.command()
def upgrade_db():
    """Run Alembic migrations to head."""
    from askiep.core.migrations import MigrationError, get_migration_status, upgrade_to_head

    try:
        before = get_migration_status(engine)
        if before.is_up_to_date:
            click.echo(f"✓ Already at head: {', '.join(before.head_revisions)}")
            return
        after = upgrade_to_head(engine)
    except (MigrationError, SQLAlchemyError) as e:
        raise click.ClickException(str(e))
    click.echo(f"✓ Upgraded to {', '.join(after.current_heads)}")


@cli.command()
@click.option("--owner-key", default=None, help="Owner key for the demo profile")
def seed_demo(owner_key: str | None):
    """
    Create a demo profile with sample logs.

    Example:
        askiep seed-demo --owner-key demo
    """
    from askiep.db.enums import CommMethod, ComplianceStatus, GoalStatus
    from askiep.schemas.behavior import BehaviorLogCreate
    from askiep.schemas.comm import CommLogCreate
    from askiep.schemas.compliance import ComplianceLogCreate
    from askiep.schemas.profile import ProfileSave
    from askiep.schemas.progress import GoalProgressCreate
    from askiep.services import (
        behavior_service,
        comm_service,
        compliance_service,
        profile_service,
        progress_service,
    )

    owner_key = owner_key or settings.DEFAULT_OWNER_KEY
    today = dt.date.today()
    db = SessionLocal()
    try:
        profile, created = profile_service.save_profile(
            db,
            owner_key,
            ProfileSave(
                name="Alex",
                age=9,
                grade="3rd",
                disabilities=["ADHD", "Dyslexia"],
                focus_tags=["Reading", "Attention"],
                advocacy_level="Beginner",
                primary_goal="Get reading support delivered as written",
                state_context="CA",
            ),
        )
        for days_ago, status in enumerate(
            [ComplianceStatus.RECEIVED, ComplianceStatus.RECEIVED,
             ComplianceStatus.PARTIAL, ComplianceStatus.MISSED]
        ):
            compliance_service.create_log(db, ComplianceLogCreate(
                child_id=profile.id,
                date=today - dt.timedelta(days=days_ago * 7),
                service_type="Speech Therapy",
                status=status,
            ))
        for goal, status in [
            ("Reading fluency", GoalStatus.PROGRESSING),
            ("Sight words", GoalStatus.MASTERED),
        ]:
            progress_service.create_progress(db, GoalProgressCreate(
                child_id=profile.id, goal_name=goal, current_value="40",
                target_value="60", status=status,
            ))
        comm_service.create_comm_log(db, CommLogCreate(
            child_id=profile.id, date=today, contact_name="Ms. Rivera",
            method=CommMethod.EMAIL, summary="Asked for the speech therapy schedule",
            follow_up_needed=True,
        ))
        behavior_service.create_behavior_log(db, BehaviorLogCreate(
            child_id=profile.id, date=today, antecedent="Independent reading time",
            behavior="Left seat", consequence="Redirected", intensity=2,
            duration_minutes=5,
        ))
    except (AppError, SQLAlchemyError) as e:
        db.rollback()
        raise click.ClickException(f"Seeding failed: {e}")
    finally:
        db.close()

    click.echo(f"✓ {'Created' if created else 'Updated'} demo profile for owner '{owner_key}'")
    click.echo(f"  ID: {profile.id}")


@cli.command()
@click.option("--base-url", default=None, help="API base URL, e.g. http://localhost:8000/api")
def check_health(base_url: str | None):
    """Ping the API and print the connectivity status."""

    async def _run():
        overrides = {"base_url": base_url} if base_url else {}
        client = _client_from_settings(**overrides)
        async with client:
            return await client.check_health()

    status = asyncio.run(_run())
    if status.online:
        click.echo(f"✓ Online ({status.latency_ms:.0f} ms)")
    else:
        click.echo(f"✗ Offline: {status.error}")
        raise SystemExit(1)


@cli.command()
@click.argument("child_id")
@click.option("--base-url", default=None, help="API base URL")
@click.option("--owner-key", default=None, help="Owner key sent with each request")
def stats(child_id: str, base_url: str | None, owner_key: str | None):
    """Print dashboard aggregates for CHILD_ID (falls back to the local cache)."""

    async def _run():
        overrides = {}
        if base_url:
            overrides["base_url"] = base_url
        if owner_key:
            overrides["owner_key"] = owner_key
        async with _client_from_settings(**overrides) as client:
            return await client.get_dashboard_stats(child_id)

    data = asyncio.run(_run())
    click.echo(f"Compliance rate: {data['compliance_rate']}% ({data['total_logs']} logs)")
    click.echo(f"Mastery index:   {data['mastery_index']}% ({data['total_goals']} goals)")
    for service in data["services"]:
        click.echo(f"  {service['service_type']}: {service['rate']}% of {service['total']}")
    for goal in data["goal_completion"]:
        click.echo(f"  {goal['goal_name']}: {goal['percent']}% ({goal['status']})")


def _client_from_settings(base_url: str | None = None, **overrides):
    from askiep.client import ClientSettings, IepApiClient

    client_settings = ClientSettings()
    if base_url:
        client_settings.BASE_URL = base_url
    return IepApiClient.from_settings(client_settings, **overrides)


if __name__ == "__main__":
    cli()
