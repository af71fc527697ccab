from click.testing import CliRunner

from askiep.cli import cli
from askiep.db.models import ChildProfile, ComplianceLog


def test_seed_demo_creates_profile_with_logs(db):
    runner = CliRunner()

    result = runner.invoke(cli, ["seed-demo", "--owner-key", "demo-owner"])

    assert result.exit_code == 0, result.output
    assert "Created demo profile" in result.output
    profile = db.query(ChildProfile).filter(ChildProfile.owner_key == "demo-owner").one()
    assert db.query(ComplianceLog).filter(ComplianceLog.child_id == profile.id).count() == 4


def test_seed_demo_twice_updates(db):
    runner = CliRunner()
    runner.invoke(cli, ["seed-demo", "--owner-key", "demo-owner"])

    result = runner.invoke(cli, ["seed-demo", "--owner-key", "demo-owner"])

    assert "Updated demo profile" in result.output
    assert db.query(ChildProfile).filter(ChildProfile.owner_key == "demo-owner").count() == 1
