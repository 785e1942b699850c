"""
Serializes a user's journal into downloadable documents: an HTML page meant
to be printed or saved as PDF, a CSV sheet, and a JSON dump with metadata.
"""

import csv
import datetime
import html
import io
import json
from typing import Any, Dict, List, Literal, Optional, Sequence

from bloom.core.clock import Zone, as_aware, local_now, to_local

ExportFormat = Literal["html", "csv", "json"]

PLATFORM_NAME = "Inner Thought Bloom"
MISSING = "N/A"
CSV_HEADERS = ["Date", "Time", "Content", "Mood", "Intensity", "AI Feedback"]

MEDIA_TYPES = {
    "html": "text/html; charset=utf-8",
    "csv": "text/csv; charset=utf-8",
    "json": "application/json",
}

HTML_STYLE = """
    body { font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; line-height: 1.6; color: #333; max-width: 800px; margin: 0 auto; padding: 20px; }
    .header { text-align: center; border-bottom: 2px solid #8b5cf6; padding-bottom: 20px; margin-bottom: 30px; }
    .header h1 { color: #8b5cf6; margin: 0; }
    .header p { color: #666; margin: 5px 0; }
    .memory { margin-bottom: 30px; padding: 20px; border: 1px solid #e0e0e0; border-radius: 8px; background: #fafafa; }
    .memory-header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 15px; }
    .memory-date { color: #666; font-size: 14px; }
    .mood-badge { background: #8b5cf6; color: white; padding: 4px 8px; border-radius: 4px; font-size: 12px; text-transform: capitalize; }
    .memory-content { margin-bottom: 15px; line-height: 1.8; }
    .ai-feedback { background: #f0f7ff; border-left: 4px solid #8b5cf6; padding: 15px; margin-top: 15px; border-radius: 4px; }
    .ai-feedback h4 { margin: 0 0 10px 0; color: #8b5cf6; }
    .stats { background: #f9f9f9; padding: 20px; border-radius: 8px; margin-top: 30px; }
    .stats h3 { margin-top: 0; color: #8b5cf6; }
"""


def count_moods(entries: Sequence[Any]) -> Dict[str, int]:
    """Entries per explicit label. Entries without a label are not counted."""
    return {
        label: sum(1 for e in entries if e.sentiment_label == label)
        for label in ("positive", "neutral", "negative")
    }


def period_label(date_range: str) -> str:
    return "All time" if date_range == "all" else f"Last {date_range}"


def export_filename(fmt: ExportFormat, date_range: str, today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return f"inner-thought-bloom-journal-{date_range}-{today.isoformat()}.{fmt}"


def _content_html(text: str) -> str:
    # Escape first so the inserted <br> tags survive
    return html.escape(text or "").replace("\n", "<br>")


def to_html(
    entries: Sequence[Any],
    date_range: str = "all",
    tz: Zone = None,
    generated_at: Optional[datetime.datetime] = None,
) -> str:
    generated_at = generated_at or local_now(tz)
    blocks = []
    for entry in entries:
        created = to_local(entry.created_at, tz)
        badge = (
            f'<span class="mood-badge">{html.escape(entry.sentiment_label)}</span>'
            if entry.sentiment_label else ""
        )
        insight = (
            '<div class="ai-feedback"><h4>💡 AI Wellness Insight</h4>'
            f"<p>{html.escape(entry.ai_feedback)}</p></div>"
            if entry.ai_feedback else ""
        )
        blocks.append(
            '<div class="memory">'
            '<div class="memory-header">'
            f'<span class="memory-date">{created:%Y-%m-%d} at {created:%H:%M:%S}</span>'
            f"{badge}</div>"
            f'<div class="memory-content">{_content_html(entry.content)}</div>'
            f"{insight}</div>"
        )

    moods = count_moods(entries)
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{PLATFORM_NAME} - Journal Export</title>
<style>{HTML_STYLE}</style>
</head>
<body>
<div class="header">
<h1>🌸 {PLATFORM_NAME}</h1>
<p>Personal Wellness Journal Export</p>
<p>Generated on {generated_at:%Y-%m-%d}</p>
<p>Total Entries: {len(entries)}</p>
</div>
{"".join(blocks)}
<div class="stats">
<h3>📊 Export Summary</h3>
<p><strong>Period:</strong> {period_label(date_range)}</p>
<p><strong>Total Entries:</strong> {len(entries)}</p>
<p><strong>Mood Distribution:</strong></p>
<ul>
<li>Positive: {moods["positive"]} entries</li>
<li>Neutral: {moods["neutral"]} entries</li>
<li>Negative: {moods["negative"]} entries</li>
</ul>
</div>
</body>
</html>
"""


def _or_missing(value: Any) -> str:
    if value is None or value == "":
        return MISSING
    return str(value)


def to_csv(entries: Sequence[Any], tz: Zone = None) -> str:
    """
    One row per entry. Every field is quoted and embedded quotes are doubled,
    so content with commas, quotes or newlines stays in a single cell.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in entries:
        created = to_local(entry.created_at, tz)
        writer.writerow([
            created.strftime("%Y-%m-%d"),
            created.strftime("%H:%M:%S"),
            entry.content or "",
            _or_missing(entry.sentiment_label),
            _or_missing(entry.mood_intensity),
            _or_missing(entry.ai_feedback),
        ])
    return buffer.getvalue()


def _iso(dt: Optional[datetime.datetime]) -> Optional[str]:
    return as_aware(dt).isoformat() if dt else None


def to_json(
    entries: Sequence[Any],
    date_range: str = "all",
    metrics: Optional[Sequence[Any]] = None,
    goals: Optional[Sequence[Any]] = None,
    exported_at: Optional[datetime.datetime] = None,
) -> str:
    exported_at = exported_at or datetime.datetime.now(datetime.timezone.utc)
    data: Dict[str, Any] = {
        "exportInfo": {
            "platform": PLATFORM_NAME,
            "exportDate": _iso(exported_at),
            "dateRange": date_range,
            "totalEntries": len(entries),
        },
        "memories": [
            {
                "id": str(e.id),
                "content": e.content,
                "createdAt": _iso(e.created_at),
                "mood": e.sentiment_label,
                "moodIntensity": e.mood_intensity,
                "aiInsight": e.ai_feedback,
            }
            for e in entries
        ],
        "statistics": {"moodDistribution": count_moods(entries)},
    }

    if metrics is not None:
        data["wellnessMetrics"] = [
            {
                "date": m.date.isoformat(),
                "sleepHours": m.sleep_hours,
                "exerciseMinutes": m.exercise_minutes,
                "waterGlasses": m.water_glasses,
                "energyLevel": m.energy_level,
                "stressLevel": m.stress_level,
            }
            for m in metrics
        ]
    if goals is not None:
        data["goals"] = [
            {
                "id": str(g.id),
                "title": g.title,
                "description": g.description,
                "targetDate": g.target_date.isoformat() if g.target_date else None,
                "completed": g.completed,
                "createdAt": _iso(g.created_at),
            }
            for g in goals
        ]

    return json.dumps(data, indent=2, ensure_ascii=False)


def render_export(
    fmt: ExportFormat,
    entries: Sequence[Any],
    date_range: str = "all",
    tz: Zone = None,
    metrics: Optional[List[Any]] = None,
    goals: Optional[List[Any]] = None,
) -> str:
    if fmt == "html":
        return to_html(entries, date_range, tz)
    if fmt == "csv":
        return to_csv(entries, tz)
    if fmt == "json":
        return to_json(entries, date_range, metrics=metrics, goals=goals)
    raise ValueError(f"Unsupported export format '{fmt}'")
