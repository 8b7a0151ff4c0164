"""Email spam protection and link relation policy."""

from .email_obfuscator import EmailObfuscator
from .url_policy import UrlPolicy

__all__ = ["EmailObfuscator", "UrlPolicy"]
