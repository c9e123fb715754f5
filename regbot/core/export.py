import csv
import io

CSV_HEADER = ["Telegram ID", "Full Name", "Username", "Department", "Year", "Joined Date"]


def build_csv(records):
    """Render records as CSV bytes, one row per user, joined date in ISO-8601."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in records:
        writer.writerow([
            r.telegram_id,
            r.full_name or "",
            r.username or "",
            r.department or "",
            r.year or "",
            r.joined_at.isoformat() if r.joined_at else "",
        ])
    return buf.getvalue().encode("utf-8")


def export_filename(today):
    return f"users_export_{today.isoformat()}.csv"
