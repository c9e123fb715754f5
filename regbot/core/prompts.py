from telegram.helpers import escape_markdown

REGISTER_LABEL = "👤 Register User"
MY_INFO_LABEL = "📊 My Info"
ALL_USERS_LABEL = "📋 All Users"
EXPORT_LABEL = "📤 Export Data"
HELP_LABEL = "ℹ️ Help"

MENU_LAYOUT = [
    [REGISTER_LABEL, MY_INFO_LABEL],
    [ALL_USERS_LABEL, EXPORT_LABEL],
    [HELP_LABEL],
]

MAIN_MENU = """🔥 *Registration Bot*

Collect and manage user registrations.

Choose an option below:"""

WELCOME = """👋 *Welcome to the Registration Bot!*

This bot stores your registration details:
✅ Register user information
📊 View your stored data
📋 List all users (Admin)
📤 Export user data (Admin)

Start by registering your info!"""

ASK_NAME = """👤 *User Registration - Step 1/3*

Please enter your full name:"""

ASK_DEPARTMENT = """🎓 *Step 2/3 - Department*

Enter your department:"""

ASK_YEAR = """📅 *Step 3/3 - Year*

Enter your academic year:
(e.g., 1st, 2nd, 3rd, 4th, 5th)"""

SAVE_FAILED = "❌ Failed to save your information. Please try again."
ADMIN_REQUIRED = "❌ Admin access required."
NO_USERS = "📋 No users registered yet."
NOTHING_TO_EXPORT = "📤 No data to export."
INTERNAL_ERROR = "⚠️ Something went wrong. Please try again."

NOT_REGISTERED = f"""📊 *My Information*

You haven't registered yet.

Use "{REGISTER_LABEL}" to get started!"""


def _md(value, default="Not set"):
    return escape_markdown(str(value)) if value else default


def _date(value):
    return value.strftime("%Y-%m-%d") if value else "Unknown"


def registration_complete(record, storage_label):
    location = "to Firebase" if storage_label == "Firebase" else "in memory"
    return (
        "✅ *Registration Complete!*\n\n"
        f"👤 *Name:* {_md(record.full_name)}\n"
        f"🎓 *Department:* {_md(record.department)}\n"
        f"📅 *Year:* {_md(record.year)}\n\n"
        f"Your information has been saved {location}!"
    )


def my_info(record, storage_label):
    return (
        "📊 *Your Information*\n\n"
        f"👤 *Name:* {_md(record.full_name)}\n"
        f"🎓 *Department:* {_md(record.department)}\n"
        f"📅 *Year:* {_md(record.year)}\n"
        f"🆔 *Telegram ID:* {record.telegram_id}\n"
        f"👤 *Username:* @{_md(record.username)}\n"
        f"📅 *Joined:* {_date(record.joined_at)}\n\n"
        f"💾 *Storage:* {storage_label}"
    )


def all_users(records):
    lines = [f"📋 *All Users ({len(records)})*", ""]
    for i, r in enumerate(records, 1):
        lines.append(f"{i}. 👤 {_md(r.display_name, 'Unknown')}")
        lines.append(f"   🎓 {_md(r.department, 'No department')} | 📅 {_md(r.year, 'No year')}")
        lines.append(f"   🆔 {r.telegram_id}")
        lines.append("")
    return "\n".join(lines).rstrip()


def export_summary(count, storage_label, today):
    return (
        "✅ *Data Exported Successfully!*\n\n"
        f"📊 Total users: {count}\n"
        f"💾 Storage: {storage_label}\n"
        f"📅 Export date: {today.isoformat()}"
    )


def help_text(is_admin, storage_label):
    storage = "Firebase (Live)" if storage_label == "Firebase" else "Memory (Test)"
    text = (
        "ℹ️ *Registration Bot Help*\n\n"
        "*User Commands:*\n"
        f"{REGISTER_LABEL} - Register your information\n"
        f"{MY_INFO_LABEL} - View your stored data\n"
        f"{HELP_LABEL} - Show this help message\n\n"
        f"*Storage:* {storage}"
    )
    if is_admin:
        text += (
            "\n\n*⚡ Admin Commands:*\n"
            f"{ALL_USERS_LABEL} - List all registered users\n"
            f"{EXPORT_LABEL} - Download user data as CSV"
        )
    return text
