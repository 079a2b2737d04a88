"""
HTML templates for the relayed emails.

Each renderer takes a view-model and returns the HTML body. Visitor-supplied
values are escaped before they are interpolated.
"""

from datetime import datetime
from html import escape

import pytz

from email_relay.schemas.emailSchemas import ContactNotificationView, ReplyView


def format_sent_at(moment: datetime = None, timezone: str = "America/Sao_Paulo") -> str:
    """
    Format a timestamp the way the pt-BR locale prints dates, e.g. ``19/10/2026, 14:05:09``.

    Args:
        moment: Aware or naive (UTC) datetime. Defaults to now.
        timezone: IANA timezone the timestamp is shown in.
    """
    tz = pytz.timezone(timezone)
    if moment is None:
        moment = datetime.now(tz)
    elif moment.tzinfo is None:
        moment = pytz.utc.localize(moment).astimezone(tz)
    else:
        moment = moment.astimezone(tz)
    return moment.strftime("%d/%m/%Y, %H:%M:%S")


def render_contact_notification(view: ContactNotificationView) -> str:
    """Render the notification sent to the operator when the contact form is submitted."""
    name = escape(view.name)
    email = escape(view.email)
    phone = escape(view.phone)
    route_label = escape(view.route_label)
    message = escape(view.message)

    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f9f9f9;">
        <div style="background-color: #1e40af; color: white; padding: 30px; border-radius: 10px 10px 0 0; text-align: center;">
            <h1 style="margin: 0; font-size: 28px; font-weight: bold;">🛥️ ParatyBoat</h1>
            <p style="margin: 10px 0 0 0; font-size: 16px; opacity: 0.9;">Novo Contato Recebido</p>
        </div>

        <div style="background-color: white; padding: 30px; border-radius: 0 0 10px 10px; box-shadow: 0 4px 6px rgba(0,0,0,0.1);">
            <h2 style="color: #1e40af; margin-bottom: 25px; border-bottom: 2px solid #e5e7eb; padding-bottom: 15px;">Informações do Cliente</h2>

            <div style="margin-bottom: 20px;">
                <strong style="color: #374151; display: inline-block; width: 120px;">Nome:</strong>
                <span style="color: #111827;">{name}</span>
            </div>

            <div style="margin-bottom: 20px;">
                <strong style="color: #374151; display: inline-block; width: 120px;">Email:</strong>
                <a href="mailto:{email}" style="color: #1e40af; text-decoration: none;">{email}</a>
            </div>

            <div style="margin-bottom: 20px;">
                <strong style="color: #374151; display: inline-block; width: 120px;">Telefone:</strong>
                <a href="tel:{phone}" style="color: #1e40af; text-decoration: none;">{phone}</a>
            </div>

            <div style="margin-bottom: 25px;">
                <strong style="color: #374151; display: inline-block; width: 120px;">Roteiro:</strong>
                <span style="color: #111827; background-color: #f3f4f6; padding: 4px 8px; border-radius: 4px;">{route_label}</span>
            </div>

            <div style="margin-bottom: 20px;">
                <strong style="color: #374151; display: block; margin-bottom: 10px;">Mensagem:</strong>
                <div style="background-color: #f9fafb; padding: 15px; border-radius: 8px; border-left: 4px solid #1e40af;">
                    <p style="margin: 0; line-height: 1.6; color: #374151;">{message}</p>
                </div>
            </div>

            <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb; text-align: center;">
                <p style="color: #6b7280; margin: 0; font-size: 14px;">
                    Email enviado automaticamente pelo site ParatyBoat
                </p>
                <p style="color: #6b7280; margin: 5px 0 0 0; font-size: 12px;">
                    {view.sent_at}
                </p>
            </div>
        </div>
    </div>
    """


def render_reply(view: ReplyView) -> str:
    """Render an administrator's reply inside the Paraty Boat header and footer."""
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <div style="background: linear-gradient(135deg, #0a3d62, #1e8449); padding: 20px; text-align: center;">
            <h1 style="color: white; margin: 0;">⛵ Paraty Boat</h1>
        </div>
        <div style="padding: 30px; background: #f9f9f9;">
            <p style="white-space: pre-wrap; line-height: 1.6;">{escape(view.message)}</p>
        </div>
        <div style="padding: 20px; text-align: center; background: #0a3d62; color: white;">
            <p style="margin: 0; font-size: 14px;">Paraty Boat - Passeios de Lancha em Paraty</p>
            <p style="margin: 5px 0 0 0; font-size: 12px;">📞 WhatsApp: (11) 98244-8956</p>
        </div>
    </div>
    """
