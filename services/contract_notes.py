# services/contract_notes.py
"""
Legacy password marker kept inside contract notes.

Contracts written by the first version of the back office store the tenant
secret as a ``PASSWORD:<digits>`` line in the free-text notes, and the
dashboard still reads it from there. These helpers are the only code that
reads or writes that line.
"""
import re
from typing import Optional

PASSWORD_PREFIX = "PASSWORD:"
PASSWORD_PATTERN = re.compile(r"PASSWORD:(\d+)")


def extract_password(notes: Optional[str]) -> Optional[str]:
     """Return the secret of the last marker in ``notes``, or None."""
     if not notes:
          return None
     matches = PASSWORD_PATTERN.findall(notes)
     return matches[-1] if matches else None


def strip_password(notes: Optional[str]) -> str:
     """Remove every marker and trim the remaining text."""
     if not notes:
          return ""
     return PASSWORD_PATTERN.sub("", notes).strip()


def append_password(notes: Optional[str], password: str) -> str:
     """Add the marker as a new line after ``notes``."""
     marker = f"{PASSWORD_PREFIX}{password}"
     return f"{notes}\n{marker}" if notes else marker


def notes_with_new_password(current: Optional[str], submitted: Optional[str], password: str) -> str:
     """
     Notes after an operator sets a new secret.

     Submitted text replaces the stored text when it is non-empty; otherwise
     the stored text is kept. Old markers are dropped either way.
     """
     submitted_text = strip_password(submitted)
     base = submitted_text if submitted_text else strip_password(current)
     return append_password(base, password)


def notes_keeping_password(current: Optional[str], submitted: Optional[str]) -> Optional[str]:
     """
     Notes after an edit that does not touch the secret.

     Submitted text wins over stored text; the stored marker is carried over.
     Markers typed into the submitted text are ignored so that an old secret
     can never shadow the current one.
     """
     existing = extract_password(current)
     if not submitted:
          return current
     base = strip_password(submitted)
     if existing is None:
          return base
     return append_password(base, existing)
