"""Flask web application for workshop ITV tracking."""

import os
from datetime import date
from pathlib import Path

import yaml
from flask import Flask, render_template, request, redirect, url_for, flash, session

# Add parent directory to path for package imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from itv import (
    ComplianceState,
    PushTransport,
    Vehicle,
    WorkshopSettings,
    add_vehicle,
    evaluate,
    load_settings,
    load_vehicles,
    save_last_itv_date,
    save_settings,
    scan_and_notify,
    sort_by_urgency,
    summarize,
)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["WORKSHOP_FILE"] = os.environ.get(
    "WORKSHOP_FILE", str(Path(__file__).parent.parent / "workshop.yaml")
)
app.config["PUSH_WEBHOOK_URL"] = os.environ.get("PUSH_WEBHOOK_URL")


def get_workshop_file() -> Path:
    return Path(app.config["WORKSHOP_FILE"])


def get_push_transport() -> PushTransport:
    return PushTransport(app.config.get("PUSH_WEBHOOK_URL"))


def get_vehicle(vehicle_id: str):
    """Find a vehicle by id, None if missing."""
    for vehicle in load_vehicles(get_workshop_file()):
        if vehicle.id == vehicle_id:
            return vehicle
    return None


def format_date(value):
    """Format date for display."""
    if value is None or value == "":
        return "—"
    if isinstance(value, date):
        return value.isoformat()
    return value


def state_color(state: ComplianceState) -> str:
    """Get Tailwind color classes for an ITV state."""
    colors = {
        ComplianceState.EXPIRED: "bg-red-100 text-red-800 border-red-200",
        ComplianceState.WARNING: "bg-yellow-100 text-yellow-800 border-yellow-200",
        ComplianceState.VALID: "bg-green-100 text-green-800 border-green-200",
        ComplianceState.EXEMPT: "bg-blue-100 text-blue-800 border-blue-200",
        ComplianceState.NO_DATA: "bg-gray-100 text-gray-500 border-gray-200",
    }
    return colors.get(state, "bg-gray-100 text-gray-800")


def flash_toast(message: str, severity: str) -> None:
    """Show an alert as a flashed toast, severity as the category."""
    flash(message, severity)


def run_alert_scan() -> None:
    """Scan ITV alerts; data file errors are logged and flashed, not raised."""
    try:
        scan_and_notify(
            get_workshop_file(), date.today(), flash_toast, get_push_transport()
        )
    except (OSError, yaml.YAMLError) as e:
        app.logger.error("ITV alert scan failed: %s", e)
        flash("Could not run the ITV alert scan", "error")


# Register template filters
app.jinja_env.filters["format_date"] = format_date
app.jinja_env.filters["state_color"] = state_color


@app.route("/")
def index():
    """Dashboard showing every vehicle's ITV state."""
    # App start: scan once per browser session
    if not session.get("alerts_scanned"):
        session["alerts_scanned"] = True
        run_alert_scan()

    show_all = request.args.get("all", "").lower() == "true"
    today = date.today()

    try:
        vehicles = load_vehicles(get_workshop_file())
    except (OSError, yaml.YAMLError) as e:
        app.logger.error("Could not load %s: %s", get_workshop_file(), e)
        flash("Could not load the workshop data", "error")
        vehicles = []
    if not show_all:
        vehicles = [v for v in vehicles if not v.is_archived]

    rows = sort_by_urgency((v, v.itv_status(today)) for v in vehicles)
    counts = summarize(status for _, status in rows)
    attention = sum(1 for _, status in rows if status.needs_attention)

    return render_template(
        "index.html",
        rows=rows,
        counts=counts,
        attention=attention,
        show_all=show_all,
        today=today,
        ComplianceState=ComplianceState,
    )


@app.route("/alerts/scan", methods=["POST"])
def scan_alerts():
    """Explicitly re-run the ITV alert scan."""
    run_alert_scan()
    return redirect(url_for("index"))


@app.route("/vehicle/<vehicle_id>")
def vehicle_detail(vehicle_id: str):
    """Vehicle detail page with ITV status."""
    vehicle = get_vehicle(vehicle_id)
    if vehicle is None:
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    return render_template(
        "vehicle.html",
        vehicle=vehicle,
        status=vehicle.itv_status(date.today()),
        today=date.today().isoformat(),
    )


@app.route("/vehicle/<vehicle_id>/itv", methods=["POST"])
def log_itv(vehicle_id: str):
    """Handle record inspection form submission."""
    itv_date = request.form.get("date") or date.today().isoformat()

    try:
        date.fromisoformat(itv_date)
        save_last_itv_date(get_workshop_file(), vehicle_id, itv_date)
    except ValueError:
        flash("Invalid inspection date", "error")
        return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))
    except KeyError:
        flash(f"Vehicle '{vehicle_id}' not found", "error")
        return redirect(url_for("index"))

    flash(f"Inspection recorded on {itv_date}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle_id))


@app.route("/vehicles", methods=["POST"])
def create_vehicle():
    """Handle add vehicle form submission."""
    plate = (request.form.get("plate") or "").strip().upper()
    make = request.form.get("make") or ""
    model = request.form.get("model") or ""
    year = request.form.get("year")
    last_itv = request.form.get("last_itv") or None
    mileage = request.form.get("mileage")

    if not plate:
        flash("Please enter a plate", "error")
        return redirect(url_for("index"))

    try:
        year_val = int(year) if year else None
        mileage_val = float(mileage) if mileage else None
        if last_itv:
            date.fromisoformat(last_itv)
    except ValueError:
        flash("Invalid vehicle data", "error")
        return redirect(url_for("index"))

    vehicle = Vehicle(
        plate=plate,
        make=make,
        model=model,
        year=year_val,
        last_itv_date=last_itv,
        client_id=request.form.get("client_id") or None,
        current_mileage=mileage_val,
    )
    add_vehicle(get_workshop_file(), vehicle)
    flash(f"Added vehicle {plate}", "success")
    return redirect(url_for("vehicle_detail", vehicle_id=vehicle.id))


@app.route("/itv/preview")
def itv_preview():
    """HTMX partial: ITV badge for the add vehicle form."""
    year = request.args.get("year")
    last_itv = request.args.get("last_itv") or None
    try:
        preview = Vehicle(
            plate="preview",
            make="",
            model="",
            year=int(year) if year else None,
            last_itv_date=last_itv,
        )
        status = evaluate(preview, date.today())
    except ValueError:
        status = None

    return render_template("partials/itv_badge.html", status=status)


@app.route("/settings", methods=["GET"])
def settings_page():
    """Workshop settings: ITV alert thresholds."""
    try:
        settings = load_settings(get_workshop_file())
    except (OSError, yaml.YAMLError) as e:
        app.logger.error("Could not load %s: %s", get_workshop_file(), e)
        flash("Could not load the workshop data", "error")
        settings = WorkshopSettings()

    return render_template(
        "settings.html",
        settings=settings,
        push_enabled=get_push_transport().enabled,
    )


@app.route("/settings", methods=["POST"])
def update_settings():
    """Add or remove an alert threshold."""
    path = get_workshop_file()

    try:
        settings = load_settings(path)
        if request.form.get("add"):
            settings.add_threshold(int(request.form["add"]))
        if request.form.get("remove"):
            settings.remove_threshold(int(request.form["remove"]))
        save_settings(path, settings)
    except ValueError as e:
        flash(f"Invalid threshold: {e}", "error")
        return redirect(url_for("settings_page"))
    except (OSError, yaml.YAMLError) as e:
        app.logger.error("Could not save settings to %s: %s", path, e)
        flash("Could not save the workshop settings", "error")
        return redirect(url_for("settings_page"))

    flash("Settings saved", "success")
    return redirect(url_for("settings_page"))


@app.route("/push/test", methods=["POST"])
def test_push():
    """Send a test push notification."""
    push = get_push_transport()
    if not push.enabled:
        flash("Push notifications are not configured", "error")
    else:
        push.send("Test notification", "This is a test push from the workshop.")
        flash("Test notification sent", "success")
    return redirect(url_for("settings_page"))


if __name__ == "__main__":
    # Run with debug mode for development
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
