# payana/services/templates.py

"""
HTML-письма о новых заявках.

Письмо = шапка (цвет и заголовок по типу заявки) + таблица «поле → значение»
+ блок с призывом к действию + подвал со временем заявки.
"""

from datetime import datetime
from html import escape
from zoneinfo import ZoneInfo

NOT_SPECIFIED = "Not specified"
NOT_PROVIDED = "Not provided"
SEPARATOR = ("---", "---")

# тип заявки -> оформление письма
LEAD_TEMPLATES = {
    "study": {
        "subject": "🎓 New Study Abroad Inquiry - Payana Overseas",
        "color": "#0066cc",
        "title": "🎓 New Study Abroad Inquiry",
        "intro": "A new student has expressed interest in studying abroad. Here are their details:",
        "note_bg": "#fff3cd",
        "note_border": "#ffc107",
        "note": "<strong>⚡ Action Required:</strong> Please follow up with this lead as soon as possible.",
    },
    "work": {
        "subject": "💼 New Work Abroad Inquiry - Payana Overseas",
        "color": "#28a745",
        "title": "💼 New Work Abroad Inquiry",
        "intro": "A new candidate is interested in working abroad. Here are their details:",
        "note_bg": "#d1ecf1",
        "note_border": "#17a2b8",
        "note": "<strong>💡 Tip:</strong> Review the candidate's profile and reach out within 24 hours for best conversion rates.",
    },
    "invest": {
        "subject": "💰 New Investment Inquiry - Payana Overseas",
        "color": "#dc3545",
        "title": "💰 New Investment Inquiry",
        "intro": "A potential investor has expressed interest in investing abroad. Here are their details:",
        "note_bg": "#f8d7da",
        "note_border": "#dc3545",
        "note": "<strong>🔥 High Priority:</strong> Investment inquiries require immediate attention. Schedule a consultation call ASAP.",
    },
}


def format_table(fields: list[tuple[str, object]]) -> str:
    """Таблица «поле → значение»; пустое значение выводится как N/A."""
    rows = "".join(
        f'<tr style="border-bottom: 1px solid #ddd;">'
        f'<th align="left" style="padding: 10px; background-color: #f5f5f5; font-weight: 600;">{escape(label)}</th>'
        f'<td style="padding: 10px;">{escape(str(value)) if value else "N/A"}</td>'
        f"</tr>"
        for label, value in fields
    )
    return (
        '<table border="1" cellpadding="10" cellspacing="0" '
        'style="border-collapse: collapse; width: 100%; max-width: 600px; font-family: Arial, sans-serif;">'
        '<thead><tr style="background-color: #0066cc; color: white;">'
        '<th align="left" style="padding: 12px;">Field</th>'
        '<th align="left" style="padding: 12px;">Value</th>'
        "</tr></thead>"
        f"<tbody>{rows}</tbody></table>"
    )


def study_fields(lead) -> list[tuple[str, object]]:
    return [
        ("Country of Interest", lead.country or NOT_SPECIFIED),
        ("Qualification", lead.qualification or NOT_SPECIFIED),
        ("Age", lead.age or NOT_SPECIFIED),
        ("Education Topic", lead.education_topic or NOT_SPECIFIED),
        ("Current CGPA", lead.cgpa or NOT_SPECIFIED),
        ("Budget Range", lead.budget or NOT_SPECIFIED),
        ("Needs Loan", "Yes" if lead.needs_loan else "No"),
        SEPARATOR,
        ("Full Name", lead.name or NOT_PROVIDED),
        ("Email Address", lead.email or NOT_PROVIDED),
        ("Phone Number", lead.phone or NOT_PROVIDED),
    ]


def work_fields(lead) -> list[tuple[str, object]]:
    return [
        ("Occupation", lead.occupation or NOT_SPECIFIED),
        ("Education Level", lead.education or NOT_SPECIFIED),
        ("Experience", lead.experience or NOT_SPECIFIED),
        SEPARATOR,
        ("Full Name", lead.name or NOT_PROVIDED),
        ("Email Address", lead.email or NOT_PROVIDED),
        ("Phone Number", lead.phone or NOT_PROVIDED),
    ]


def invest_fields(lead) -> list[tuple[str, object]]:
    return [
        ("Country of Interest", lead.country or NOT_SPECIFIED),
        SEPARATOR,
        ("Full Name", lead.name or NOT_PROVIDED),
        ("Email Address", lead.email or NOT_PROVIDED),
    ]


LEAD_FIELDS = {
    "study": study_fields,
    "work": work_fields,
    "invest": invest_fields,
}


def render_lead_email(kind: str, lead, timezone: str = "Asia/Kolkata", now: datetime | None = None) -> tuple[str, str]:
    """Возвращает (subject, html) для заявки типа kind: study / work / invest."""
    template = LEAD_TEMPLATES[kind]
    now = now or datetime.now(ZoneInfo(timezone))
    submitted = now.astimezone(ZoneInfo(timezone)).strftime("%d/%m/%Y, %I:%M:%S %p")
    table = format_table(LEAD_FIELDS[kind](lead))

    html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background-color: {template['color']}; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0;">
    <h1 style="margin: 0; font-size: 24px;">{template['title']}</h1>
  </div>
  <div style="background-color: #f9f9f9; padding: 20px; border-radius: 0 0 8px 8px;">
    <p style="font-size: 16px; margin-bottom: 20px;">{template['intro']}</p>
    {table}
    <div style="margin-top: 30px; padding: 15px; background-color: {template['note_bg']}; border-left: 4px solid {template['note_border']}; border-radius: 4px;">
      <p style="margin: 0; font-size: 14px;">{template['note']}</p>
    </div>
    <div style="margin-top: 20px; padding-top: 20px; border-top: 1px solid #ddd; text-align: center; font-size: 12px; color: #666;">
      <p style="margin: 5px 0;">This is an automated notification from Payana Overseas CRM</p>
      <p style="margin: 5px 0;">Submission Time: {submitted}</p>
    </div>
  </div>
</body>
</html>
"""
    return template["subject"], html
