"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.teamhub.core.config import get_settings
from src.teamhub.core.logging import get_logger

logger = get_logger(__name__)

_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_CODE_STYLE = (
    "background-color: #f3f4f6; padding: 12px 24px; border-radius: 6px; "
    "display: inline-block; font-family: monospace; font-size: 20px; letter-spacing: 2px;"
)
_MUTED_STYLE = "color: #666; font-size: 14px;"


def send_temporary_password_email(to: str, user_name: str, temporary_password: str) -> bool:
    """Mail a freshly issued temporary password.

    Returns:
        True if the email was sent (or logged because Resend is not configured),
        False on error.
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning(
            "RESEND_API_KEY not set - email not sent",
            to=to,
            email_type="temporary_password",
        )
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": f"[{settings.app_name}] 임시 비밀번호 안내",
                "html": _get_temporary_password_html(
                    user_name, temporary_password, settings.app_url
                ),
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Temporary password email sent", to=to)
        return True
    except FuturesTimeoutError:
        logger.error("Email send timed out", to=to, timeout=settings.email_send_timeout_seconds)
        return False
    except Exception as e:
        logger.error("Failed to send temporary password email", to=to, error=str(e))
        return False


def _get_temporary_password_html(user_name: str, temporary_password: str, app_url: str) -> str:
    safe_user_name = html.escape(user_name)
    safe_password = html.escape(temporary_password)
    safe_url = html.escape(app_url)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">임시 비밀번호</h1>
    <p>{safe_user_name}님, 요청하신 임시 비밀번호입니다.</p>
    <p style="margin: 32px 0;"><span style="{_CODE_STYLE}">{safe_password}</span></p>
    <p>
        <a href="{safe_url}/login">{safe_url}/login</a> 에서 로그인한 뒤
        비밀번호를 변경해 주세요.
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        비밀번호 재설정을 요청하지 않으셨다면 관리자에게 문의해 주세요.
    </p>
</body>
</html>"""
