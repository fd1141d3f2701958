"""Contact form email bodies."""

from __future__ import annotations

from html import escape

from app.adapters.mail.base import OutboundEmail
from app.schemas.contact import CreateContactMessageRequest

_NOTIFICATION_HTML = """\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; background-color: #0f172a; color: #e2e8f0;">
    <div style="max-width: 600px; margin: 40px auto; background-color: #1e293b; border-radius: 16px;">
      <div style="background: #10b981; padding: 32px; text-align: center;">
        <h1 style="margin: 0; color: #fff;">New Contact Form Submission</h1>
      </div>
      <div style="padding: 32px;">
        <p><strong>From:</strong> {name} &lt;<a href="mailto:{email}">{email}</a>&gt;</p>
        <p><strong>Subject:</strong> {subject}</p>
        <div style="background-color: #0f172a; border-radius: 8px; padding: 20px;">{message}</div>
      </div>
      <div style="padding: 24px; text-align: center; color: #64748b; font-size: 12px;">
        Sent from the {site_name} contact form
      </div>
    </div>
  </body>
</html>
"""

_CONFIRMATION_HTML = """\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; background-color: #0f172a; color: #e2e8f0;">
    <div style="max-width: 600px; margin: 40px auto; background-color: #1e293b; border-radius: 16px; padding: 32px;">
      <h1 style="color: #10b981;">Thanks for reaching out, {name}!</h1>
      <p>I have received your message and will get back to you as soon as possible.</p>
      <div style="background-color: #0f172a; border-radius: 8px; padding: 20px;">
        <p><strong>{subject}</strong></p>
        <p>{message}</p>
      </div>
      <p style="color: #64748b; font-size: 12px;">{site_name}</p>
    </div>
  </body>
</html>
"""

_NO_SUBJECT = "No subject"


def _html_message(text: str) -> str:
    return escape(text).replace("\n", "<br>")


def contact_notification(form: CreateContactMessageRequest, *, to: str, site_name: str) -> OutboundEmail:
    subject = form.subject or _NO_SUBJECT
    text = (
        f"New message from the {site_name} contact form\n\n"
        f"Name: {form.name}\n"
        f"Email: {form.email}\n"
        f"Subject: {subject}\n\n"
        f"{form.message}\n"
    )
    html = _NOTIFICATION_HTML.format(
        name=escape(form.name),
        email=escape(str(form.email)),
        subject=escape(subject),
        message=_html_message(form.message),
        site_name=escape(site_name),
    )
    return OutboundEmail(
        to=to,
        subject=f"New contact: {subject}",
        text=text,
        html=html,
        reply_to=str(form.email),
    )


def contact_confirmation(form: CreateContactMessageRequest, *, site_name: str) -> OutboundEmail:
    subject = form.subject or _NO_SUBJECT
    text = (
        f"Hi {form.name},\n\n"
        "Thanks for reaching out! I have received your message and will get back to you soon.\n\n"
        f"Your message ({subject}):\n{form.message}\n\n"
        f"{site_name}\n"
    )
    html = _CONFIRMATION_HTML.format(
        name=escape(form.name),
        subject=escape(subject),
        message=_html_message(form.message),
        site_name=escape(site_name),
    )
    return OutboundEmail(to=str(form.email), subject="Thanks for reaching out!", text=text, html=html)


__all__ = ["contact_confirmation", "contact_notification"]
