from typing import List, Any, Optional

TELEGRAM_MESSAGE_LIMIT = 4096


def escape_html(text: str) -> str:
    """Escape HTML special characters for Telegram's HTML parse mode."""
    return (text
        .replace('&', '&amp;')
        .replace('<', '&lt;')
        .replace('>', '&gt;')
    )


def _field(record: Any, name: str, default: str = "") -> str:
    value = getattr(record, name, None)
    if value is None:
        return default
    return escape_html(str(getattr(value, 'value', value)))


def _categories(record: Any) -> str:
    value = getattr(record, 'service_category', None)
    if isinstance(value, (list, tuple)):
        return escape_html(", ".join(str(v) for v in value))
    return _field(record, 'service_category')


def truncate_message(message: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> str:
    """Cut an escaped message to the limit without splitting an entity."""
    if len(message) <= limit:
        return message
    cut = message[:limit - 3]
    amp = cut.rfind('&')
    if amp != -1 and ';' not in cut[amp:]:
        cut = cut[:amp]
    return cut + "..."


class NotificationMessageBuilder:
    """Formats the outbound Telegram messages for each queue."""

    @staticmethod
    def build_talent_post(talent: Any) -> str:
        """Talents channel post announcing an approved talent."""
        skills: List[str] = list(getattr(talent, 'skills', None) or [])
        lines = [
            "🎯 <b>New Talent Available!</b>",
            "",
            f"Name: {_field(talent, 'name')}",
            f"Category: {_categories(talent)}",
            f"Experience: {_field(talent, 'experience_level')}",
            f"Skills: {escape_html(', '.join(skills))}",
        ]
        bio = _field(talent, 'bio')
        if bio:
            lines.extend(["", bio])
        lines.extend(["", f"Contact via bot: /talent_{talent.id}"])
        return truncate_message("\n".join(lines))

    @staticmethod
    def build_job_post(job: Any) -> str:
        """Jobs channel post announcing a published job."""
        lines = [
            "📢 <b>New Job Opportunity</b>",
            "",
            f"Title: {_field(job, 'title')}",
            f"Category: {_categories(job)}",
            f"Experience: {_field(job, 'experience_level')}",
            f"Type: {_field(job, 'engagement_type')}",
        ]
        duration = _field(job, 'duration')
        if duration:
            lines.append(f"Duration: {duration}")

        skills: List[str] = list(getattr(job, 'required_skills', None) or [])
        if skills:
            lines.extend(["", "Required Skills:"])
            lines.extend(f"• {escape_html(skill)}" for skill in skills)

        description = _field(job, 'description')
        if description:
            lines.extend(["", "Description:", description])

        lines.extend(["", f"Apply via bot: /apply_{job.id}"])
        return truncate_message("\n".join(lines))

    @staticmethod
    def build_match_notification(talent: Any, job: Any, match_score: float) -> str:
        """Direct message telling a talent about a matching job."""
        lines = [
            "🎯 <b>New Job Match Found!</b>",
            "",
            f"A new job opportunity matches your profile ({_field(talent, 'name', 'Talent')}):",
            "",
            f"• Title: {_field(job, 'title')}",
            f"• Category: {_categories(job)}",
            f"• Match Score: {float(match_score):.1f}%",
            f"• Type: {_field(job, 'engagement_type')}",
        ]
        duration: Optional[str] = _field(job, 'duration')
        if duration:
            lines.append(f"• Duration: {duration}")
        lines.extend(["", f"View details: /job_{job.id}"])
        return truncate_message("\n".join(lines))
