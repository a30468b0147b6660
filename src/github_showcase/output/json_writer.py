"""JSON export of the dashboard views."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from github_showcase.models.activity import ActivitySeries
from github_showcase.models.project import ProjectFilterState, ProjectQueryResult
from github_showcase.models.views import ProfileView


def serialize_for_json(obj: Any) -> Any:
    """Convert objects to JSON-serializable format."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    elif isinstance(obj, dict):
        return {k: serialize_for_json(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [serialize_for_json(item) for item in obj]
    return obj


def build_report(
    username: str,
    profile: Optional[ProfileView],
    activity: Optional[ActivitySeries],
    projects: Optional[ProjectQueryResult],
    filters: Optional[ProjectFilterState] = None,
    bookmarks: Optional[list[int]] = None,
    errors: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Build an export of whichever views loaded.

    Args:
        username: Account the views were loaded for
        profile: Profile view, or None if it failed
        activity: Activity series, or None if it failed
        projects: Project query result, or None if it failed
        filters: Filter state the projects were queried with
        bookmarks: Bookmarked repository ids
        errors: View name -> failure message

    Returns:
        Dictionary ready for JSON serialization
    """
    report: dict[str, Any] = {
        "username": username,
        "generated_at": datetime.now().isoformat(),
        "profile": None,
        "stats": None,
        "activity": None,
        "projects": None,
        "bookmarks": bookmarks or [],
        "errors": errors or {},
    }

    if profile is not None:
        report["profile"] = serialize_for_json(profile.profile)
        stats = serialize_for_json(profile.stats)
        stats["top_languages"] = [
            {"language": lang, "repos": count} for lang, count in profile.stats.top_languages(None)
        ]
        report["stats"] = stats

    if activity is not None:
        report["activity"] = {
            "days": [{"date": d.date.isoformat(), "label": d.label, "count": d.count} for d in activity.days],
            "event_types": activity.event_types,
            "total_events": activity.total_events,
        }

    if projects is not None:
        report["projects"] = {
            "filters": serialize_for_json(filters) if filters else None,
            "shown": projects.shown,
            "total": projects.total,
            "items": serialize_for_json(projects.projects),
        }

    return report


def write_json_report(
    report: dict[str, Any],
    output_path: Optional[Path] = None,
    username: Optional[str] = None,
) -> Path:
    """Write report to JSON file.

    Args:
        report: Report dictionary
        output_path: Output file path (optional)
        username: Username for default filename

    Returns:
        Path to written file
    """
    if output_path is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        username = username or report.get("username", "unknown")
        output_path = Path("output") / f"{username}_{timestamp}.json"

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False, default=str)

    return output_path
