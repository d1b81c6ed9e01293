from __future__ import annotations

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.enums import LocationStatus
from ..core.exceptions import DomainError
from ..location.provider import ClientReportedLocationProvider
from .form import CheckInForm

FORM_SESSION_KEY = "checkin_form"
LAST_RECORD_SESSION_KEY = "last_record_id"


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _on_submit_success(record) -> None:
        # Records page highlights the newest entry after a redirect.
        session[LAST_RECORD_SESSION_KEY] = record.id

    def _load_form() -> CheckInForm:
        return CheckInForm.from_session(
            session.get(FORM_SESSION_KEY),
            service,
            options=container.location_options,
            on_submit_success=_on_submit_success,
        )

    def _save_form(form: CheckInForm) -> None:
        session[FORM_SESSION_KEY] = form.to_session()

    @app.route("/", endpoint="index")
    def index():
        form = _load_form()
        return render_template(
            "index.html",
            form=form,
            badge=form.badge(),
            location=form.location_view(),
            zone=container.zone,
            now=service.current_time_ui(),
            location_options=container.location_options.as_browser_options(),
            active_page="checkin",
        )

    @app.route("/api/location", methods=["POST"], endpoint="api_location")
    def api_location():
        """Receives the browser's geolocation callback result and classifies it."""
        try:
            payload = request.get_json(silent=True)
            form = _load_form()
            seen = len(form.notices)

            form.refresh_location(ClientReportedLocationProvider(payload))
            _save_form(form)

            new_notices = form.notices[seen:]
            return jsonify({
                "success": form.location_status == LocationStatus.SUCCESS,
                "status": form.location_status.value,
                "badge": form.badge(),
                "in_zone": form.in_zone,
                "distance": form.zone_check.distance_meters if form.zone_check else None,
                "location": form.location_view(),
                "can_submit": form.can_submit,
                "notice": new_notices[-1].to_dict() if new_notices else None,
            }), 200
        except Exception:
            app.logger.exception("Location report failed")
            return jsonify({
                "success": False,
                "message": "System error while processing location",
            }), 500

    @app.route("/checkin", methods=["POST"], endpoint="checkin")
    def checkin():
        form = _load_form()
        form.name = request.form.get("name", "")
        form.result = request.form.get("result", "")
        try:
            outcome = form.submit()
            flash(f"{outcome.notice.title} {outcome.notice.description}", outcome.notice.flash_category)
        except DomainError as e:
            flash(str(e), "warning")
        except Exception:
            app.logger.exception("Check-in failed")
            flash("System error while submitting attendance", "danger")
        _save_form(form)
        return redirect(url_for("index"))

    @app.route("/records", endpoint="records")
    def records():
        data = service.get_records_ui()
        return render_template(
            "records.html",
            data=data,
            highlight_id=session.pop(LAST_RECORD_SESSION_KEY, None),
            active_page="records",
        )

    @app.route("/api/records", endpoint="api_records")
    def api_records():
        return jsonify([r.to_dict() for r in service.list_records()])
