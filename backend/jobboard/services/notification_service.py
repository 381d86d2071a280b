"""
Outbound email for applicant status updates and manager shortlists.

Each call makes at most one request to the provider. Failures (including
timeouts) surface as ``UpstreamError``; nothing is retried here.
"""
import logging
from dataclasses import dataclass, field
from html import escape

import httpx

from jobboard.config import settings
from jobboard.errors import UpstreamError, ValidationError
from jobboard.models.application import ApplicationStatus

logger = logging.getLogger("jobboard.notifications")


@dataclass
class SendReceipt:
    id: str | None
    provider_response: dict = field(default_factory=dict)


@dataclass
class ShortlistEntry:
    name: str
    age: int | None = None
    experience_years: int | None = None
    resume_url: str | None = None


def render_status_email(status: ApplicationStatus, applicant_name: str, job_title: str,
                        company_name: str, message: str | None = None) -> tuple[str, str]:
    name, title, company = escape(applicant_name), escape(job_title), escape(company_name)

    if status == ApplicationStatus.SHORTLISTED:
        subject = f"Congratulations! You've been shortlisted for {job_title}"
        body = (
            f"<h1>Great News, {name}!</h1>"
            f"<p>We're pleased to inform you that your application for <strong>{title}</strong> "
            f"at <strong>{company}</strong> has been shortlisted.</p>"
            "<p>Please expect to hear from us soon regarding the interview schedule.</p>"
        )
        closing = "Best regards"
    elif status == ApplicationStatus.REJECTED:
        subject = f"Application Update for {job_title}"
        body = (
            f"<h1>Dear {name},</h1>"
            f"<p>Thank you for your interest in the <strong>{title}</strong> position "
            f"at <strong>{company}</strong>.</p>"
            "<p>After careful consideration, we have decided to move forward with other candidates "
            "whose experience more closely matches our current needs.</p>"
        )
        closing = "Best wishes"
    elif status == ApplicationStatus.SELECTED:
        subject = f"Congratulations! You've been selected for {job_title}"
        body = (
            f"<h1>Congratulations, {name}!</h1>"
            f"<p>We're thrilled to inform you that you have been selected for the "
            f"<strong>{title}</strong> position at <strong>{company}</strong>!</p>"
            "<p>Our HR team will be in touch shortly with the offer details and next steps.</p>"
        )
        closing = "Welcome aboard!"
    else:
        subject = f"Application Update for {job_title}"
        body = (
            f"<h1>Dear {name},</h1>"
            f"<p>This is an update regarding your application for <strong>{title}</strong> "
            f"at <strong>{company}</strong>.</p>"
            f"<p>Your application status has been updated to: <strong>{escape(status.value)}</strong></p>"
        )
        closing = "Best regards"

    if message:
        body += f"<p>{escape(message)}</p>"
    body += f"<br><p>{closing}<br>The {company} Team</p>"
    return subject, body


def render_shortlist_email(job_title: str, company_name: str, applicants: list[ShortlistEntry],
                           message: str | None = None) -> tuple[str, str]:
    title, company = escape(job_title), escape(company_name)
    rows = []
    for index, applicant in enumerate(applicants, start=1):
        if applicant.resume_url:
            resume = f'<a href="{escape(applicant.resume_url, quote=True)}" target="_blank">View Resume</a>'
        else:
            resume = "No resume"
        age = applicant.age if applicant.age is not None else "N/A"
        rows.append(
            "<tr>"
            f"<td>{index}</td>"
            f"<td>{escape(applicant.name)}</td>"
            f"<td>{age}</td>"
            f"<td>{applicant.experience_years or 0} years</td>"
            f"<td>{resume}</td>"
            "</tr>"
        )

    note = f"<div><strong>Message from HR:</strong><p>{escape(message)}</p></div>" if message else ""
    html = (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        "<title>Shortlisted Candidates</title></head><body>"
        f"<h1>Shortlisted Candidates for {title}</h1><p>{company}</p>"
        f"{note}"
        f"<p>Please find below the list of <strong>{len(applicants)}</strong> "
        "shortlisted candidate(s) for your review:</p>"
        "<table><thead><tr><th>#</th><th>Name</th><th>Age</th><th>Experience</th><th>Resume</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody></table>"
        f"<p>This email was sent by the HR team at {company}.</p>"
        "</body></html>"
    )
    return f"Shortlisted Candidates for {job_title}", html


class NotificationDispatcher:
    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        from_address: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url or settings.email_api_url
        self.api_key = api_key if api_key is not None else settings.email_api_key
        self.from_address = from_address or settings.email_from_address
        self.timeout = timeout if timeout is not None else settings.email_timeout_seconds
        self._transport = transport

    async def notify(self, application, status: ApplicationStatus, job_title: str,
                     company_name: str, message: str | None = None) -> SendReceipt:
        if not (application.applicant_email or "").strip():
            raise ValidationError("applicant_email", "recipient email is required")

        subject, html = render_status_email(
            status, application.applicant_name or "Applicant", job_title, company_name, message
        )
        logger.info("Sending %s email for application %s", status.value, application.id)
        return await self._send(
            sender=f"{company_name} <{self.from_address}>",
            to=application.applicant_email.strip(),
            subject=subject,
            html=html,
        )

    async def send_shortlist(self, boss_email: str, job_title: str, company_name: str,
                             applicants: list[ShortlistEntry], message: str | None = None) -> SendReceipt:
        if not (boss_email or "").strip():
            raise ValidationError("boss_email", "recipient email is required")
        if not applicants:
            raise ValidationError("applicants", "at least one applicant is required")

        subject, html = render_shortlist_email(job_title, company_name, applicants, message)
        logger.info("Sending %d shortlisted candidate(s) for %s", len(applicants), job_title)
        return await self._send(
            sender=f"{company_name} Hiring <{self.from_address}>",
            to=boss_email.strip(),
            subject=subject,
            html=html,
        )

    async def _send(self, sender: str, to: str, subject: str, html: str) -> SendReceipt:
        if not self.api_key:
            raise UpstreamError("Email provider is not configured")

        payload = {"from": sender, "to": [to], "subject": subject, "html": html}
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.TimeoutException as exc:
            logger.error("Email provider timed out after %.1fs", self.timeout)
            raise UpstreamError("Email provider timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Email provider request failed: %s", exc)
            raise UpstreamError("Email provider request failed") from exc

        if response.status_code >= 400:
            logger.error("Email provider rejected message: %s %s", response.status_code, response.text)
            raise UpstreamError(f"Email provider returned {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return SendReceipt(id=body.get("id"), provider_response=body)


def get_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher()
