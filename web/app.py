"""Flask web application for home maintenance tracking."""

from datetime import date, datetime, timezone
from io import BytesIO
from pathlib import Path

from flask import (
    Flask,
    abort,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    url_for,
)
from werkzeug.utils import secure_filename

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.calculations import parse_date
from models.loader import load_category_config, open_store
from models.ranking import rank_store
from models.record import MaintenanceRecord
from models.status import Status
from settings import load_settings

settings = load_settings()

app = Flask(__name__)
app.secret_key = settings.secret_key
app.config.update(
    MAINT_HOME=settings.home,
    MAINT_BACKEND=settings.backend,
    MAINT_DATABASE_URL=settings.database_url,
    MAINT_CONFIG=settings.config_file,
    MAINT_DUE_SOON_DAYS=settings.due_soon_days,
)


def get_store():
    """Record store for the configured backend, reused across requests."""
    key = (
        app.config["MAINT_BACKEND"],
        str(app.config["MAINT_HOME"]),
        app.config["MAINT_DATABASE_URL"],
    )
    cached = app.extensions.get("maint_store")
    if cached is None or cached[0] != key:
        store = open_store(*key)
        app.extensions["maint_store"] = (key, store)
        return store
    return cached[1]


def get_config():
    return load_category_config(app.config["MAINT_CONFIG"])


def get_urgency_list():
    """Ranked urgency entries for the dashboard."""
    return rank_store(get_store(), get_config(), datetime.now(timezone.utc))


def format_days(days):
    """Format a day count for display."""
    if days is None:
        return "—"
    return f"{days:,d}d"


def format_date(date_str):
    """Format date for display."""
    if date_str is None:
        return "—"
    return date_str


def status_color(status: Status) -> str:
    """Get Tailwind color classes for status."""
    colors = {
        Status.OVERDUE: "bg-red-100 text-red-800 border-red-200",
        Status.DUE_SOON: "bg-yellow-100 text-yellow-800 border-yellow-200",
        Status.OK: "bg-green-100 text-green-800 border-green-200",
        Status.UNKNOWN: "bg-purple-100 text-purple-800 border-purple-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


def status_badge_color(status: Status) -> str:
    """Get Tailwind color classes for status badge."""
    colors = {
        Status.OVERDUE: "bg-red-500 text-white",
        Status.DUE_SOON: "bg-yellow-500 text-white",
        Status.OK: "bg-green-500 text-white",
        Status.UNKNOWN: "bg-purple-500 text-white",
    }
    return colors.get(status, "bg-gray-500 text-white")


# Register template filters
app.jinja_env.filters["format_days"] = format_days
app.jinja_env.filters["format_date"] = format_date
app.jinja_env.filters["status_color"] = status_color
app.jinja_env.filters["status_badge_color"] = status_badge_color


@app.route("/")
def index():
    """Dashboard ranking categories by urgency."""
    categories = get_store().list_categories()
    urgency_list = get_urgency_list()
    due_soon_days = app.config["MAINT_DUE_SOON_DAYS"]

    rows = [
        {"entry": entry, "status": entry.status_with(due_soon_days)}
        for entry in urgency_list
    ]
    overdue = sum(1 for r in rows if r["status"] == Status.OVERDUE)

    return render_template(
        "index.html",
        categories=categories,
        urgency_rows=rows,
        overdue=overdue,
    )


@app.route("/api/urgency")
def urgency_api():
    """JSON urgency ranking."""
    due_soon_days = app.config["MAINT_DUE_SOON_DAYS"]
    return jsonify([entry.to_dict(due_soon_days) for entry in get_urgency_list()])


@app.route("/category/<name>", methods=["GET"])
def category_detail(name: str):
    """Category page with record history and add-record form."""
    store = get_store()
    if name not in store.list_categories():
        abort(404)

    records = list(reversed(store.records_for(name)))
    config = get_config().get(name)

    return render_template(
        "category.html",
        category=name,
        config=config,
        records=records,
        today=date.today().isoformat(),
    )


@app.route("/category/<name>", methods=["POST"])
def add_record(name: str):
    """Handle add-record form submission."""
    store = get_store()
    if name not in store.list_categories():
        abort(404)

    service_date = (request.form.get("date") or "").strip()
    company = (request.form.get("company") or "").strip()
    service_type = (request.form.get("type") or "").strip()
    notes = request.form.get("notes") or None

    # Validate
    missing = [
        label
        for label, value in (("date", service_date), ("company", company), ("type", service_type))
        if not value
    ]
    if missing:
        flash(f"Please fill in: {', '.join(missing)}", "error")
        return redirect(url_for("category_detail", name=name))

    if parse_date(service_date) is None:
        flash(f"Invalid date: {service_date}", "error")
        return redirect(url_for("category_detail", name=name))

    pdf_name = None
    pdf_data = None
    upload = request.files.get("pdf")
    if upload and upload.filename:
        pdf_name = secure_filename(upload.filename) or "upload.pdf"
        pdf_data = upload.read()

    record = MaintenanceRecord(
        category=name,
        date=service_date,
        company=company,
        type=service_type,
        notes=notes,
        pdf_name=pdf_name,
        pdf_data=pdf_data,
    )
    stored = store.add_record(record)
    app.logger.info("Logged %s record %s", name, stored.record_id)
    flash(f"Logged service: {service_type}", "success")

    return redirect(url_for("category_detail", name=name))


@app.route("/category/<name>/records/<int:record_id>/pdf")
def record_pdf(name: str, record_id: int):
    """Download the PDF attached to a record."""
    pdf = get_store().get_pdf(name, record_id)
    if pdf is None:
        abort(404)

    filename, data = pdf
    return send_file(
        BytesIO(data),
        mimetype="application/pdf",
        download_name=filename,
    )


if __name__ == "__main__":
    # Run with debug mode for development
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
