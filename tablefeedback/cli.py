from urllib.parse import urlencode

import click
from flask import current_app
from flask.cli import with_appcontext
from tablefeedback.extensions import db
from tablefeedback.models import Business, User, Feedback, DiningTable
from tablefeedback.services.alerts import alert_reason, resolved_feedback_ids, unresolved_alerts
from tablefeedback.utils.helpers import get_display_tz, relative_time

def _get_or_create_business(name: str, owner_email: str) -> Business:
    business = db.session.query(Business).filter(Business.name == name).one_or_none()
    if business:
        return business
    business = Business(name=name, owner_email=owner_email)
    db.session.add(business)
    db.session.flush()
    return business

def survey_url(base_url: str, business_id: int, table_number: int) -> str:
    query = urlencode({"business": business_id, "table": table_number})
    return f"{base_url.rstrip('/')}/survey?{query}"

@click.group()
def bootstrap():
    """Bootstrap helpers."""

@bootstrap.command("owner")
@click.option("--business-name", required=True)
@click.option("--email", required=True)
@click.option("--password", required=True)
@with_appcontext
def bootstrap_owner(business_name, email, password):
    # fail fast if user exists
    if db.session.query(User).filter_by(email=email).count():
        raise click.ClickException("User already exists")

    business = _get_or_create_business(business_name, email)

    user = User(email=email, is_active=True)
    user.set_password(password)
    user.business_id = business.id
    db.session.add(user)
    db.session.commit()

    click.echo(f"Bootstrap complete: business_id={business.id} owner_user_id={user.id} email={email}")

@click.group()
def tables():
    """Table / QR link management."""

@tables.command("generate")
@click.option("--business-id", type=int, required=True)
@click.option("--count", type=int, required=True, help="Number of tables (1..500)")
@with_appcontext
def tables_generate(business_id, count):
    """Replace the business's tables with 1..COUNT and their survey URLs."""
    limit = int(current_app.config.get("MAX_TABLES_PER_BUSINESS", 500))
    if count <= 0 or count > limit:
        raise click.ClickException(f"Count must be between 1 and {limit}")

    business = db.session.get(Business, business_id)
    if not business:
        raise click.ClickException(f"Business id {business_id} not found")

    base = current_app.config.get("APP_BASE_URL", "")
    db.session.query(DiningTable).filter(DiningTable.business_id == business.id).delete()
    for n in range(1, count + 1):
        db.session.add(DiningTable(
            business_id=business.id,
            table_number=n,
            qr_url=survey_url(base, business.id, n),
        ))
    db.session.commit()

    click.echo(f"Generated {count} tables for business_id={business.id}")
    click.echo(f"  e.g. {survey_url(base, business.id, 1)}")

@click.group()
def alerts():
    """Alert triage from the shell."""

@alerts.command("list")
@click.option("--business-id", type=int, required=True)
@with_appcontext
def alerts_list(business_id):
    items = (
        db.session.query(Feedback)
        .filter(Feedback.business_id == business_id)
        .order_by(Feedback.timestamp.desc(), Feedback.id.desc())
        .all()
    )
    threshold = int(current_app.config.get("ALERT_RATING_THRESHOLD", 2))
    tz = get_display_tz(current_app.config.get("DISPLAY_TIMEZONE"))
    pending = unresolved_alerts(items, resolved_feedback_ids(business_id), threshold)
    if not pending:
        click.echo("No unresolved alerts")
        return
    for fb in pending:
        reason = alert_reason(fb, threshold)
        click.echo(
            f"#{fb.id} table={fb.table_number} rating={fb.rating} "
            f"reason={reason.label} ({relative_time(fb.timestamp, tz=tz)})"
        )
    click.echo(f"{len(pending)} unresolved alert(s)")

def register_cli(app):
    app.cli.add_command(bootstrap)
    app.cli.add_command(tables)
    app.cli.add_command(alerts)
