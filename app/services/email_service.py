"""
Email Service
Handles sending emails for reservation notifications
"""

from flask import current_app
from flask_mail import Message
from extensions import mail


RESERVATION_CREATED = 'reservation.created'
RESERVATION_STATUS_CHANGED = 'reservation.status_changed'


class EmailService:
    """Service for sending emails"""

    @staticmethod
    def send_email(to, subject, html_body, text_body=None):
        """Send an email"""
        try:
            msg = Message(
                subject=subject,
                recipients=[to] if isinstance(to, str) else to,
                html=html_body,
                body=text_body or html_body
            )
            mail.send(msg)
            return True
        except Exception as e:
            current_app.logger.error(f'Failed to send email: {str(e)}')
            return False

    @staticmethod
    def notify(event, payload):
        """
        Dispatch a reservation event. Best effort: any failure is logged and
        swallowed so it never affects the write that triggered it.
        """
        try:
            handler = _HANDLERS.get(event)
            if handler is None:
                current_app.logger.warning(f'No notification handler for {event}')
                return False
            return handler(payload)
        except Exception as e:
            current_app.logger.error(f'Notification {event} failed: {str(e)}')
            return False

    @staticmethod
    def send_reservation_notification(payload):
        """Tell the admin inbox about a new reservation request"""
        recipient = current_app.config.get('ADMIN_NOTIFICATION_EMAIL')
        if not recipient:
            current_app.logger.info('ADMIN_NOTIFICATION_EMAIL not set, skipping reservation email')
            return False

        reservation = payload['reservation']
        property_obj = payload['property']
        subject = f"New Reservation: {property_obj['title']}"
        html_body = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2>New reservation request</h2>
                <div style="background-color: #f8f8f8; padding: 20px; border-radius: 5px; margin: 20px 0;">
                    <h3 style="margin-top: 0;">{property_obj['title']}</h3>
                    <p><strong>Guest:</strong> {reservation['guest_name']}</p>
                    <p><strong>Email:</strong> {reservation['guest_email']}</p>
                    <p><strong>Phone:</strong> {reservation['guest_phone']}</p>
                    <p><strong>Check-in:</strong> {reservation['start_date']}</p>
                    <p><strong>Check-out:</strong> {reservation['end_date']}</p>
                    <p><strong>Nights:</strong> {reservation['nights']}</p>
                    <p><strong>Total Price:</strong> {reservation['total_price']}</p>
                    <p><strong>Message:</strong> {reservation['message'] or '-'}</p>
                    <p><strong>Reservation ID:</strong> #{reservation['id']}</p>
                </div>
                <div style="margin: 30px 0;">
                    <a href="{current_app.config.get('FRONTEND_URL')}/reservations"
                       style="background-color: #FF5A5F; color: white; padding: 12px 30px;
                              text-decoration: none; border-radius: 5px; display: inline-block;">
                        Review Reservations
                    </a>
                </div>
            </div>
        </body>
        </html>
        """
        return EmailService.send_email(recipient, subject, html_body)

    @staticmethod
    def send_reservation_status_email(payload):
        """Let the guest know their reservation was confirmed or cancelled"""
        reservation = payload['reservation']
        if not reservation.get('guest_email'):
            return False

        status = reservation['status']
        subject = f"Reservation #{reservation['id']} {status}"
        html_body = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <p>Hi {reservation['guest_name']},</p>
                <p>Your reservation from <strong>{reservation['start_date']}</strong>
                   to <strong>{reservation['end_date']}</strong> is now <strong>{status}</strong>.</p>
                <hr style="border: none; border-top: 1px solid #eee; margin: 20px 0;">
                <p style="color: #999; font-size: 12px;">
                    This is an automated message. Please do not reply to this email.
                </p>
            </div>
        </body>
        </html>
        """
        return EmailService.send_email(reservation['guest_email'], subject, html_body)


_HANDLERS = {
    RESERVATION_CREATED: EmailService.send_reservation_notification,
    RESERVATION_STATUS_CHANGED: EmailService.send_reservation_status_email,
}
