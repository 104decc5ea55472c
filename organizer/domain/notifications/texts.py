"""User-facing Telegram texts (HTML parse mode)."""
from __future__ import annotations

NO_PROJECTS = "📝 <b>No projects yet</b>\n\nTime to set some new goals! 🎯"
ALL_DONE = "🎉 <b>All tasks done!</b>\n\nGreat management. Time for new challenges. 💪"
SUMMARY_ERROR = "🚨 <b>Could not load tasks</b>\n\nPlease check the database connection."

SUMMARY_HEADER = "🗓️ <b>Your upcoming tasks:</b>"
PROJECT_HEADER = "📋 <b>{title}:</b>"
IN_PROGRESS_HEADER = "  ⏳ <b>In progress:</b>"
TODO_HEADER = "  📝 <b>To do:</b>"
TASK_LINE = "    • {marker}{title}{annotation}"

OVERVIEW_HEADER = "📊 <b>Overview:</b>"
OVERVIEW_ACTIVE = "• Active tasks: {count}"
OVERVIEW_OVERDUE = "• ⚠️ Overdue: {count}"

TOMORROW_HEADER = "🌅 <b>Planned for tomorrow:</b>"
TOMORROW_LINE = "  • {title}"

TEST_CONNECTION = "🤖 <b>Relationship Organizer test</b>\n\nTelegram integration set up successfully!"
TEST_MESSAGE = "🧪 <b>Test message</b>\n\nThe Telegram feature works! ✅"
ERROR_NOTIFICATION = "🚨 <b>System error</b>\n\nRelationship Organizer: {error}\n\nTime: {time}"
