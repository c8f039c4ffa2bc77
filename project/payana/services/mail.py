# payana/services/mail.py

import asyncio

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from starlette.concurrency import run_in_threadpool

from payana.config import Settings
from payana.utils.errors import NotificationError
from payana.utils.log import Log


def parse_recipients(value: str) -> list[str]:
    """'a@x.com, b@y.com,' -> ['a@x.com', 'b@y.com']"""
    return [email.strip() for email in (value or "").split(",") if email.strip()]


class Mailer:
    """
    Уведомления о новых заявках через SendGrid.

    send() не ждёт отправки: письмо уходит отдельной задачей,
    ошибки только пишутся в лог и до обработчика запроса не доходят.
    """

    def __init__(self, settings: Settings, log: Log):
        self.log = log
        self.api_key = settings.SENDGRID_API_KEY
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self.receivers = settings.EMAIL_RECEIVERS
        self.tasks: set[asyncio.Task] = set()

    def recipients(self) -> list[str]:
        return parse_recipients(self.receivers)

    def send(self, subject: str, html: str) -> asyncio.Task:
        task = asyncio.create_task(self._deliver(subject, html))
        # держим ссылку, пока задача не завершится
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        return task

    async def _deliver(self, subject: str, html: str):
        recipients = self.recipients()
        try:
            status_code = await self.dispatch(subject, html, recipients)
            await self.log.log_info("mail", "Письмо отправлено", {"subject": subject, "to": recipients, "status": status_code})
        except Exception as e:
            await self.log.log_error("mail", f"Ошибка отправки письма: {e}", {"subject": subject, "to": recipients})

    async def dispatch(self, subject: str, html: str, recipients: list[str]) -> int:
        if not self.api_key:
            raise NotificationError("SENDGRID_API_KEY is not set")
        if not self.from_email:
            raise NotificationError("EMAIL_FROM is not set")
        if not recipients:
            raise NotificationError("EMAIL_RECEIVERS is empty")

        message = Mail(
            from_email=(self.from_email, self.from_name),
            to_emails=recipients,
            subject=subject,
            html_content=html,
        )

        try:
            response = await run_in_threadpool(SendGridAPIClient(self.api_key).send, message)
        except Exception as e:
            raise NotificationError(f"SendGrid error: {e}") from e
        return response.status_code

    async def drain(self):
        """Дождаться писем, которые ещё в пути (при остановке приложения)."""
        if self.tasks:
            await asyncio.gather(*list(self.tasks), return_exceptions=True)
