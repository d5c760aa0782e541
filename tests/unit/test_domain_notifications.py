"""Unit tests for notification variants and rendering."""

import pytest
from uuid_extensions import uuid7

from credential_issuer.domain.enums import NotificationType
from credential_issuer.domain.notifications import (
    BROADCAST,
    AdminBroadcastNotification,
    IssueMessageNotification,
    IssueStatusChangedNotification,
    PaymentStatusChangedNotification,
    ResendVerificationCodeNotification,
    StudentVerifiedNotification,
    VerificationCodeNotification,
    render_notification,
    target_label,
)


@pytest.mark.unit
class TestRenderNotification:
    """Test render_notification for every variant."""

    def test_verification_code(self):
        rendered = render_notification(VerificationCodeNotification(code="042917"))

        assert rendered.type == NotificationType.STUDENT_REGISTERED
        assert rendered.subject == "Your Verification Code"
        assert "042917" in rendered.body

    def test_resend_verification_code(self):
        rendered = render_notification(ResendVerificationCodeNotification(code="555123"))

        assert rendered.type == NotificationType.STUDENT_REGISTERED
        assert rendered.subject == "Your New Verification Code"
        assert "555123" in rendered.body

    def test_student_verified_with_code(self):
        rendered = render_notification(StudentVerifiedNotification(student_code="560001"))

        assert rendered.type == NotificationType.STUDENT_VERIFIED
        assert rendered.body.endswith("Your student code is 560001.")

    def test_student_verified_without_code(self):
        rendered = render_notification(StudentVerifiedNotification())

        assert rendered.body == "Your account has been verified successfully."

    def test_payment_status_changed_includes_reason(self):
        rendered = render_notification(
            PaymentStatusChangedNotification(
                payment_reference="PAY-17", status="REJECTED", reason="Blurry receipt"
            )
        )

        assert rendered.type == NotificationType.PAYMENT_STATUS_CHANGED
        assert "PAY-17 is now rejected" in rendered.body
        assert "Reason: Blurry receipt" in rendered.body

    def test_issue_status_changed(self):
        rendered = render_notification(
            IssueStatusChangedNotification(issue_title="Login broken", status="SOLVED")
        )

        assert rendered.type == NotificationType.ISSUE_STATUS_CHANGED
        assert rendered.body == 'Your issue "Login broken" is now solved.'

    def test_issue_message(self):
        rendered = render_notification(
            IssueMessageNotification(
                issue_title="Login broken", sender_name="Support", preview="Try again"
            )
        )

        assert rendered.type == NotificationType.ISSUE_MESSAGE_NEW
        assert rendered.subject == "New message on: Login broken"
        assert rendered.body == "Support wrote:\n\nTry again"

    def test_admin_broadcast_uses_title_and_message(self):
        rendered = render_notification(
            AdminBroadcastNotification(title="Maintenance", message="Down at 2am")
        )

        assert rendered.type == NotificationType.ADMIN_BROADCAST
        assert rendered.subject == "Maintenance"
        assert rendered.body == "Down at 2am"

    def test_unknown_variant_raises(self):
        with pytest.raises(TypeError, match="Unknown notification"):
            render_notification(object())  # type: ignore[arg-type]


@pytest.mark.unit
class TestTargetLabel:
    """Test loggable notification targets."""

    def test_user_target(self):
        user_id = uuid7()

        assert target_label(user_id) == str(user_id)

    def test_broadcast_target(self):
        assert target_label(BROADCAST) == "broadcast"
