"""Notification variants and their rendering.

Each notification purpose is its own frozen dataclass carrying a typed
payload. ``render_notification`` is the single pure function that turns a
variant into the subject/body pair sent to the notification service, so
adding a purpose means adding one dataclass and one ``case``.

Usage:
    rendered = render_notification(VerificationCodeNotification(code="123456"))
    rendered.type     # NotificationType.STUDENT_REGISTERED
    rendered.subject  # "Your Verification Code"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final
from uuid import UUID

from credential_issuer.domain.enums import NotificationType


class Broadcast(Enum):
    """Marker for notifications addressed to every student."""

    BROADCAST = "broadcast"


BROADCAST: Final = Broadcast.BROADCAST

type NotificationTarget = UUID | Broadcast


@dataclass(frozen=True, kw_only=True)
class VerificationCodeNotification:
    """First verification code sent after registration."""

    code: str


@dataclass(frozen=True, kw_only=True)
class ResendVerificationCodeNotification:
    """Replacement verification code after the user asked for a resend."""

    code: str


@dataclass(frozen=True, kw_only=True)
class StudentVerifiedNotification:
    """Student finished verification."""

    student_code: str | None = None


@dataclass(frozen=True, kw_only=True)
class PaymentStatusChangedNotification:
    """Payment submission was approved or rejected."""

    payment_reference: str
    status: str
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class IssueStatusChangedNotification:
    """Support issue changed status."""

    issue_title: str
    status: str


@dataclass(frozen=True, kw_only=True)
class IssueMessageNotification:
    """New message on a support issue."""

    issue_title: str
    sender_name: str
    preview: str


@dataclass(frozen=True, kw_only=True)
class AdminBroadcastNotification:
    """Free-form admin message."""

    title: str
    message: str


type Notification = (
    VerificationCodeNotification
    | ResendVerificationCodeNotification
    | StudentVerifiedNotification
    | PaymentStatusChangedNotification
    | IssueStatusChangedNotification
    | IssueMessageNotification
    | AdminBroadcastNotification
)


@dataclass(frozen=True, kw_only=True)
class RenderedNotification:
    """Notification ready for delivery.

    Attributes:
        type: Notification type expected by the notification service.
        subject: Message title.
        body: Plain text body.
    """

    type: NotificationType
    subject: str
    body: str


def render_notification(notification: Notification) -> RenderedNotification:
    """Render a notification variant into subject and body.

    Args:
        notification: Any notification variant.

    Returns:
        RenderedNotification: Type, subject and body for delivery.

    Raises:
        TypeError: If given an object that is not a known variant.
    """
    match notification:
        case VerificationCodeNotification(code=code):
            return RenderedNotification(
                type=NotificationType.STUDENT_REGISTERED,
                subject="Your Verification Code",
                body=(
                    f"Your verification code is: {code}\n\n"
                    "Use this code to verify your account. "
                    "It will expire in a few minutes."
                ),
            )
        case ResendVerificationCodeNotification(code=code):
            return RenderedNotification(
                type=NotificationType.STUDENT_REGISTERED,
                subject="Your New Verification Code",
                body=(
                    f"Your new verification code is: {code}\n\n"
                    "Any code sent to you earlier no longer works."
                ),
            )
        case StudentVerifiedNotification(student_code=student_code):
            suffix = f" Your student code is {student_code}." if student_code else ""
            return RenderedNotification(
                type=NotificationType.STUDENT_VERIFIED,
                subject="Account Verified",
                body=f"Your account has been verified successfully.{suffix}",
            )
        case PaymentStatusChangedNotification(
            payment_reference=reference, status=status, reason=reason
        ):
            detail = f"\n\nReason: {reason}" if reason else ""
            return RenderedNotification(
                type=NotificationType.PAYMENT_STATUS_CHANGED,
                subject="Payment Status Updated",
                body=f"Your payment {reference} is now {status.lower()}.{detail}",
            )
        case IssueStatusChangedNotification(issue_title=title, status=status):
            return RenderedNotification(
                type=NotificationType.ISSUE_STATUS_CHANGED,
                subject="Issue Status Updated",
                body=f'Your issue "{title}" is now {status.lower()}.',
            )
        case IssueMessageNotification(
            issue_title=title, sender_name=sender, preview=preview
        ):
            return RenderedNotification(
                type=NotificationType.ISSUE_MESSAGE_NEW,
                subject=f"New message on: {title}",
                body=f"{sender} wrote:\n\n{preview}",
            )
        case AdminBroadcastNotification(title=title, message=message):
            return RenderedNotification(
                type=NotificationType.ADMIN_BROADCAST,
                subject=title,
                body=message,
            )
        case _:
            raise TypeError(f"Unknown notification: {type(notification).__name__}")


def target_label(target: NotificationTarget) -> str:
    """Loggable form of a notification target."""
    return target.value if isinstance(target, Broadcast) else str(target)
