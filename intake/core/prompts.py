from telegram.helpers import escape_markdown

SKIP_PHOTOS = "skip_photos"

ASK_PROBLEM = "Describe the problem or the symptoms of the failure:"
ASK_PHOTOS = "Send photos of the unit/module (if you have any):"
ASK_PHONE = "Leave a phone number we can reach you at:"
SKIP_BUTTON = "Skip photos"
CANCELLED = "❌ Request cancelled. Use /start to begin again."
SUCCESS = "✅ Request sent! We will contact you soon."
PHOTOS_FAILED = "(Photos could not be delivered)"
ERROR = "❌ Something went wrong. Please try again later or contact us directly."


def welcome(first_name, company_name, company_url=""):
    """Markdown greeting that opens a new request."""
    name = escape_markdown(first_name or "there")
    company = escape_markdown(company_name)
    if company_url:
        company = f"[{company}]({company_url})"
    return (
        f"Hi, {name}! This bot takes repair requests for {company}.\n\n"
        "Enter the model of your equipment (add the year of manufacture if you can):"
    )
