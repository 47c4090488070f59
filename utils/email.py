# utils/email.py
import logging

import requests

from config import BREVO_API_KEY, MAIL_SENDER_EMAIL, MAIL_SENDER_NAME

logger = logging.getLogger(__name__)


def send_credential_email(to_email: str, full_name: str, username: str, password: str):
     if not BREVO_API_KEY:
          raise RuntimeError("BREVO_API_KEY is not set")

     response = requests.post(
          "https://api.brevo.com/v3/smtp/email",
          headers={
               "api-key": BREVO_API_KEY,
               "Content-Type": "application/json",
          },
          json={
               "sender": {"name": MAIL_SENDER_NAME, "email": MAIL_SENDER_EMAIL},
               "to": [{"email": to_email, "name": full_name}],
               "subject": "Your tenant portal login",
               "htmlContent": f"""
                    <h2>Welcome, {full_name}</h2>
                    <p>Username: <b>{username}</b></p>
                    <h1 style="color:#F28D35">{password}</h1>
                    <p>Keep this password private. Ask your landlord to reset it if it is lost.</p>
               """,
          },
          timeout=10,
     )
     if response.status_code not in (200, 201):
          raise RuntimeError(f"Brevo error: {response.text}")


def notify_tenant_credentials(to_email: str, full_name: str, username: str, password: str) -> bool:
     """
     Best-effort delivery of a new portal secret.

     Skipped when no e-mail address or API key is configured. A delivery
     failure never undoes the contract; it is logged and False is returned.
     """
     if not to_email or not BREVO_API_KEY:
          return False
     try:
          send_credential_email(to_email, full_name, username, password)
     except (requests.RequestException, RuntimeError):
          logger.warning("Could not e-mail portal credentials to tenant %s", username, exc_info=True)
          return False
     logger.info("E-mailed portal credentials to tenant %s", username)
     return True
